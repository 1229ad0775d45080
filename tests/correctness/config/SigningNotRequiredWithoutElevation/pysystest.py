__pysys_title__   = r""" Config - signing settings are optional unless elevated permissions are requested """
#                        ================================================================================
__pysys_purpose__ = r""" Partial signing settings are accepted (and ignored) when permissions.elevated is false.
	"""

__pysys_authors__ = "fxp"
__pysys_created__ = "2019-03-04"

import pysys
from pysys.constants import *
from fxtest.fxpackager_basetest import FxPackagerBaseTest

from fxpackager import config, descriptor

class PySysTest(FxPackagerBaseTest):
	def execute(self):
		sdk = self.createSdk()
		self.configs = {}
		for name, overrides in [
				('none', {}),
				('partial', {'signing.key-store':'keys.jks', 'signing.alias':'me'}),
				('explicitFalse', {'permissions.elevated':'false', 'signing.alias':'me'}),
			]:
			overrides.update({'sdk-dir':sdk, 'main-class':'demo.Main', 'project.name':'demo'})
			self.configs[name] = config.resolve(self.loadSettings(overrides))

	def validate(self):
		for name, c in sorted(self.configs.items()):
			self.log.info('Checking %s', name)
			self.assertThat('elevated == False', elevated=c.permissions.elevated)
			d = descriptor.build(c, [self.output+'/lib/a.jar'], self.output+'/classes', self.output+'/target', self.output)
			self.assertThat('signingInstructions == ()', signingInstructions=d.signing)
		self.assertThat('storeType is None', storeType=self.configs['partial'].signing.storeType)
