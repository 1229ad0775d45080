__pysys_title__   = r""" Process - environment overrides, output handling and exit codes """
#                        ================================================================================
__pysys_purpose__ = r""" """

__pysys_authors__ = "fxp"
__pysys_created__ = "2019-03-15"

import os, sys
from unittest import mock
import pysys
from pysys.constants import *
from fxtest.fxpackager_basetest import FxPackagerBaseTest

from fxpackager.utils.process import call
from fxpackager.utils.outputhandler import ProcessOutputHandler
from fxpackager.utils.buildexceptions import BuildException

SCRIPT = '; '.join([
	'import os, sys',
	'print("A=%s" % os.getenv("FXTEST_A"))',
	'print("B=%s" % os.getenv("FXTEST_B"))',
	'print("cwd=%s" % os.getcwd())',
	'print("warning: something odd")',
	'sys.stderr.write("it went wrong\\n")',
	'sys.exit(int(sys.argv[1]))',
])

class RecordingOutputHandler(ProcessOutputHandler):
	def __init__(self, name, treatStdErrAsErrors=True):
		ProcessOutputHandler.__init__(self, name, treatStdErrAsErrors)
		self.lines = []
	def handleLine(self, line, isstderr=False):
		self.lines.append(line)
		ProcessOutputHandler.handleLine(self, line, isstderr)

class PySysTest(FxPackagerBaseTest):
	def execute(self):
		self.mkdir('workdir')
		with mock.patch.dict(os.environ, {'FXTEST_B':'inherited'}):
			h = RecordingOutputHandler('child', treatStdErrAsErrors=False)
			self.passed = call([sys.executable, '-c', SCRIPT, '0'], env={'FXTEST_A':'a', 'FXTEST_B':None}, cwd=self.output+'/workdir', outputHandler=h)

			try:
				call([sys.executable, '-c', SCRIPT, '4'], outputHandler=ProcessOutputHandler('child'))
			except BuildException as e:
				self.log.info('Got expected exception: %s', e)
				self.failure = str(e)
			else:
				self.failure = None

	def validate(self):
		self.assertThat('lines[:3] == expected', lines=self.passed.lines, expected=['A=a', 'B=None', 'cwd='+os.path.join(self.output, 'workdir')])
		self.assertThat('warnings == expected', warnings=self.passed.getWarnings(), expected=['warning: something odd'])
		self.assertThat('errors == []', errors=self.passed.getErrors())
		self.assertThat('lastLine == expected', lastLine=self.passed.getLastOutputLine(), expected='it went wrong')
		self.assertThat('failure == expected', failure=self.failure, expected='it went wrong')
