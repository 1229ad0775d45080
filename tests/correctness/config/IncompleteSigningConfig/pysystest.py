__pysys_title__   = r""" Config - elevated permissions without complete signing settings """
#                        ================================================================================
__pysys_purpose__ = r""" Each of the keystore, store password, alias and key password is required when
	permissions.elevated is true; the store type defaults to jks. """

__pysys_authors__ = "fxp"
__pysys_created__ = "2019-03-04"

import pysys
from pysys.constants import *
from fxtest.fxpackager_basetest import FxPackagerBaseTest

from fxpackager import config
from fxpackager.utils.buildexceptions import IncompleteSigningConfigError

SIGNING = {
	'signing.key-store': 'keys.jks',
	'signing.store-pass': 'storesecret',
	'signing.alias': 'me',
	'signing.key-pass': 'keysecret',
}

class PySysTest(FxPackagerBaseTest):
	def execute(self):
		sdk = self.createSdk()
		self.missing = {}
		for field in sorted(SIGNING):
			overrides = dict(SIGNING)
			del overrides[field]
			overrides.update({'sdk-dir':sdk, 'main-class':'demo.Main', 'permissions.elevated':'true'})
			try:
				config.resolve(self.loadSettings(overrides))
			except IncompleteSigningConfigError as e:
				self.log.info('Got expected exception: %s', e)
				self.missing[field] = e.field
			else:
				self.addOutcome(FAILED, 'Expected IncompleteSigningConfigError when %s is missing'%field)

		overrides = dict(SIGNING)
		overrides.update({'sdk-dir':sdk, 'main-class':'demo.Main', 'permissions.elevated':'true'})
		self.complete = config.resolve(self.loadSettings(overrides))

		project = self.createProject(settings={'permissions.elevated':'true', 'signing.key-store':'keys.jks'})
		self.msg = self.fxpackager(['package'], shouldFail=True, stdouterr='fxpackager-incomplete', workingDir=project, defaultLogFile=True)

	def validate(self):
		for field in sorted(SIGNING):
			self.assertThat('reportedField == field', reportedField=self.missing.get(field), field=field)
		self.assertThat('storeType == "jks"', storeType=self.complete.signing.storeType)
		self.assertThat('"is not set" in msg and "signing.store-pass" in msg', msg=self.msg)
		self.assertPathExists('demo/target/build.xml', exists=False)
		self.assertPathExists('demo/target/fxpackager.log', exists=False)
