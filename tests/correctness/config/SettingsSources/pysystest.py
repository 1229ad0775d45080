__pysys_title__   = r""" Settings - precedence of the settings file, environment and command line """
#                        ================================================================================
__pysys_purpose__ = r""" Also checks that passwords are never displayed. """

__pysys_authors__ = "fxp"
__pysys_created__ = "2019-03-06"

import pysys
from pysys.constants import *
from fxtest.fxpackager_basetest import FxPackagerBaseTest

class PySysTest(FxPackagerBaseTest):
	def execute(self):
		project = self.createProject(settings={
			'project.name': 'fromfile',
			'project.organization': 'fileorg',
			'signing.store-pass': 'supersecret',
			'dimensions.width': '1024',
		})
		self.fxpackager(['--settings', 'project.name=fromcommandline'], stdouterr='fxpackager-settings', workingDir=project,
			env={'FXPACKAGER_PROJECT_NAME':'fromenv', 'FXPACKAGER_PROJECT_ORGANIZATION':'envorg', 'FXPACKAGER_SIGNING_KEY_PASS':'keysecret'})

		self.fxpackager(['--info', 'project.version=2.0'], stdouterr='fxpackager-info', workingDir=project,
			env={'FXPACKAGER_PROJECT_NAME':'fromenv'})

	def validate(self):
		out = 'fxpackager-settings.out'
		self.assertGrep(out, expr=r'^   project.name +fromcommandline +\(command line\)')
		self.assertGrep(out, expr=r'^   project.organization +envorg +\(environment variable FXPACKAGER_PROJECT_ORGANIZATION\)')
		self.assertGrep(out, expr=r'^   dimensions.width +1024 +\(.*fxpackager.properties:\d+\)')
		self.assertGrep(out, expr=r'^   dimensions.height +600 +\(default\)')
		self.assertGrep(out, expr=r'^   signing.store-pass +\*\*\*\* ')
		self.assertGrep(out, expr=r'^   signing.key-pass +\*\*\*\* ')
		self.assertGrep(out, expr='secret', contains=False)

		self.assertGrep('fxpackager-info.out', expr=r'^Project: +fromenv$')
		self.assertGrep('fxpackager-info.out', expr=r'^Artifact base name: +fromenv-2.0$')
		self.assertGrep('fxpackager-info.out', expr=r'^Run main class: +demo.MainLauncher$')
		self.assertGrep('fxpackager-info.out', expr=r'^Output jar: +.*fromenv-2.0.fromenv-2.0.jar$')
