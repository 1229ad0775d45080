__pysys_title__   = r""" Package - dry run writes the buildfile without running Ant """
#                        ================================================================================
__pysys_purpose__ = r""" """

__pysys_authors__ = "fxp"
__pysys_created__ = "2019-03-12"

import pysys
from pysys.constants import *
from fxtest.fxpackager_basetest import FxPackagerBaseTest

class PySysTest(FxPackagerBaseTest):
	def execute(self):
		# the Ant command does not exist, which is fine since it is never run
		project = self.createProject(settings={'ant.command':'no-such-ant'})
		self.fxpackager(['-n'], workingDir=project, defaultLogFile=True)

	def validate(self):
		self.assertPathExists('demo/target/build.xml')
		self.assertPathExists('demo/target/lib/commons.jar')
		self.assertPathExists('demo/target/demo-1.0', exists=False)
		self.assertGrep('fxpackager.out', expr=r'^\*\*\* Dry run: not running Ant; buildfile is .*build.xml')
		self.assertGrep('fxpackager.out', expr=r'^\*\*\* FXPACKAGER SUCCEEDED: dry run wrote buildfile for ')
		self.assertGrep('demo/target/build.xml', expr='<project name="demo" default="default" basedir=".">')
		self.assertGrep('demo/target/fxpackager.log', expr=r' INFO .* fxpackager - Using fxpackager ')
		self.assertGrep('demo/target/fxpackager.log', expr=r' INFO .* config .*- Artifact base name is: demo-1.0')
