__pysys_title__   = r""" Package - Ant exits with a failure """
#                        ================================================================================
__pysys_purpose__ = r""" The failure message includes the exit code and Ant's error, and the complete Ant output is
	written to the log. """

__pysys_authors__ = "fxp"
__pysys_created__ = "2019-03-11"

import pysys
from pysys.constants import *
from fxtest.fxpackager_basetest import FxPackagerBaseTest

class PySysTest(FxPackagerBaseTest):
	def execute(self):
		project = self.createProject()
		self.msg = self.fxpackager(['package'], shouldFail=True, workingDir=project, env={'FAKE_ANT_EXIT_CODE':'3'})

	def validate(self):
		self.assertThat('msg.startswith(expected)', msg=self.msg, expected='FXPACKAGER FAILED: Ant packaging failed with exit code 3: ')
		self.assertThat('"simulated failure" in msg', msg=self.msg)
		self.assertGrep('fxpackager.log', expr=r'Complete output from Ant \(exit code 3\)')
		self.assertGrep('fxpackager.log', expr=r'Total time: 0 seconds')
		self.assertPathExists('demo/target/demo-1.0/demo-1.0.jar', exists=False)
