__pysys_title__   = r""" Descriptor - identical inputs produce a byte-identical buildfile """
#                        ================================================================================
__pysys_purpose__ = r""" """

__pysys_authors__ = "fxp"
__pysys_created__ = "2019-03-07"

import pysys
from pysys.constants import *
from fxtest.fxpackager_basetest import FxPackagerBaseTest

from fxpackager import config, descriptor, antbuildfile

class PySysTest(FxPackagerBaseTest):
	def execute(self):
		sdk = self.createSdk()
		self.results = []
		for i in range(2):
			settings = self.loadSettings({'sdk-dir':sdk, 'main-class':'demo.Main', 'project.name':'demo',
				'permissions.elevated':'true', 'signing.key-store':'keys.jks', 'signing.store-pass':'p', 'signing.alias':'a', 'signing.key-pass':'k',
				'template.file':'web/index.html'})
			c = config.resolve(settings)
			d = descriptor.build(c, [self.output+'/lib/b.jar', self.output+'/lib/a.jar'], self.output+'/classes', self.output+'/target', self.output)
			self.results.append((d, antbuildfile.serialize(d)))
			self.writeFile('build-%d.xml'%i, self.results[-1][1].decode('utf-8'))

	def validate(self):
		(d1, xml1), (d2, xml2) = self.results
		self.assertThat('d1 == d2', d1=d1, d2=d2)
		self.assertThat('xml1 == xml2', xml1=xml1, xml2=xml2)
		self.assertThat('xml.startswith(expected)', xml=xml1, expected=b'<?xml version="1.0" encoding="utf-8"?>')

		# classpath order is preserved, not sorted
		self.assertThat('libraries == expected', libraries=d1.resources.libraries, expected=('b.jar', 'a.jar'))
		self.assertThat('libraries == expected', libraries=d1.deploy.libraries, expected=('b.jar', 'a.jar'))
		self.assertOrderedGrep('build-0.xml', exprList=['<taskdef ', '<fx:application ', '<fx:resources ', '<fx:jar ', '<fx:signjar ', '<fx:deploy '])
