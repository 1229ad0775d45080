__pysys_title__   = r""" Ant - the configured Ant command cannot be started """
#                        ================================================================================
__pysys_purpose__ = r""" Also checks that a missing ant.home launcher is reported as a configuration problem. """

__pysys_authors__ = "fxp"
__pysys_created__ = "2019-03-15"

import pysys
from pysys.constants import *
from fxtest.fxpackager_basetest import FxPackagerBaseTest

class PySysTest(FxPackagerBaseTest):
	def execute(self):
		project = self.createProject(settings={'ant.command':'"%s/no-such-ant"'%self.output.replace('\\', '/')})
		self.notStartedMsg = self.fxpackager(['package'], shouldFail=True, stdouterr='fxpackager-command', workingDir=project)

		self.mkdir('empty-ant-home')
		self.noLauncherMsg = self.fxpackager(['package', 'ant.command=', 'ant.home=../empty-ant-home'], shouldFail=True, stdouterr='fxpackager-home', workingDir=project)

	def validate(self):
		self.assertThat('msg.startswith(expected)', msg=self.notStartedMsg, expected='FXPACKAGER FAILED: Cannot run Ant; check the ant.command and ant.home settings: Cannot start process')
		self.assertThat('"Cannot find Ant launcher" in msg', msg=self.noLauncherMsg)
		self.assertGrep('fxpackager-command.out', expr='Traceback', contains=False)
