__pysys_title__   = r""" Descriptor - dimensions are passed through to the deploy instruction """
#                        ================================================================================
__pysys_purpose__ = r""" """

__pysys_authors__ = "fxp"
__pysys_created__ = "2019-03-08"

import pysys
from pysys.constants import *
from fxtest.fxpackager_basetest import FxPackagerBaseTest

from fxpackager import config, descriptor, antbuildfile
from fxpackager.descriptor import SignJarInstruction

class PySysTest(FxPackagerBaseTest):
	def execute(self):
		c = config.resolve(self.loadSettings({'sdk-dir':self.createSdk(), 'main-class':'demo.Main',
			'output.artifact-base-name-value':'demo',
			'dimensions.width':'800', 'dimensions.height':'600', 'dimensions.embedded-width':'100%', 'dimensions.embedded-height':'100%',
			'permissions.elevated':'false'}))
		self.packagingDescriptor = descriptor.build(c, [self.output+'/lib/a.jar'], self.output+'/classes', self.output+'/target', self.output)
		self.writeFile('build.xml', antbuildfile.serialize(self.packagingDescriptor).decode('utf-8'))

	def validate(self):
		deploy = self.packagingDescriptor.deploy
		self.assertThat('dimensions == expected', dimensions=(deploy.width, deploy.height, deploy.embeddedWidth, deploy.embeddedHeight),
			expected=(800, 600, '100%', '100%'))
		self.assertThat('outFile == "demo"', outFile=deploy.outFile)
		self.assertThat('signingInstructions == []', signingInstructions=[i for i in self.packagingDescriptor.instructions() if isinstance(i, SignJarInstruction)])
		self.assertThat('elevated == False', elevated=deploy.permissions.elevated)

		self.assertGrep('build.xml', expr='<fx:deploy width="800" height="600" embeddedWidth="100%" embeddedHeight="100%" ')
		self.assertGrep('build.xml', expr='<fx:permissions elevated="false" cacheCertificates="false"/>')
		self.assertGrep('build.xml', expr='signjar', contains=False)
