# fxpackager - JavaFX application packaging and deployment
#
# Copyright (c) 2019 The fxpackager authors
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#

"""
Running Apache Ant, and making sense of its output.
"""

import os, re
import logging

from fxpackager.utils.process import call
from fxpackager.utils.outputhandler import ProcessOutputHandler
from fxpackager.utils.buildexceptions import BuildException, PackagingFailure

log = logging.getLogger('ant')

class AntProcessOutputHandler(ProcessOutputHandler):
	"""
	Output handler for Ant. Keeps the complete output so it can be reported if Ant fails, classifies
	``BUILD FAILED`` and stderr lines as errors and ``warning:`` lines as warnings, and raises
	`fxpackager.utils.buildexceptions.PackagingFailure` if Ant exits with a non-zero status.

	>>> h = AntProcessOutputHandler()
	>>> h.handleLine(u'Buildfile: /work/target/build.xml')
	>>> h.handleLine(u'BUILD FAILED', isstderr=True)
	>>> h.handleLine(u'/work/target/build.xml:9: Error: jar not found', isstderr=True)
	>>> h.getErrors()
	['BUILD FAILED', 'Error: jar not found']
	>>> h.handleEnd(1)
	Traceback (most recent call last):
	...
	fxpackager.utils.buildexceptions.PackagingFailure: Ant packaging failed with exit code 1: Error: jar not found
	>>> h.log.splitlines()[0]
	'Buildfile: /work/target/build.xml'

	>>> h = AntProcessOutputHandler()
	>>> h.handleLine(u'[fx:deploy] Warning: no icon', isstderr=True)
	>>> h.handleEnd(0)
	"""
	def __init__(self, name='ant'):
		ProcessOutputHandler.__init__(self, name, treatStdErrAsErrors=True)
		self.__lines = []

	@property
	def log(self):
		""" Everything Ant wrote to stdout and stderr, verbatim. """
		return '\n'.join(self.__lines)

	def handleLine(self, line, isstderr=False):
		self.__lines.append(line)
		ProcessOutputHandler.handleLine(self, line, isstderr)

	def _decideLogLevel(self, line, isstderr):
		if re.search(r'warning[\s]*:', line, flags=re.IGNORECASE): return logging.WARNING
		if line.strip().startswith('BUILD FAILED'): return logging.ERROR
		if not line.strip(): return None
		return ProcessOutputHandler._decideLogLevel(self, line, isstderr)

	def _parseLocationFromLine(self, line):
		# Ant reports failures as "/path/build.xml:12: message"
		m = re.match(r'(.+?\.xml):(\d+): *(.*)', line)
		if m:
			return m.group(1), m.group(2), None, m.group(3)
		return None, None, None, line

	def handleEnd(self, returnCode=None):
		if self._warnings: self._logger.warning('%d warnings during %s', len(self._warnings), self._name)
		if not returnCode: return

		details = [e for e in self._errors if not e.startswith('BUILD FAILED')]
		msg = 'Ant packaging failed with exit code %s'%returnCode
		if details:
			msg += ': %s'%details[0]
		elif self.getLastOutputLine():
			msg += '; last line was: %s'%self.getLastOutputLine()
		raise PackagingFailure(returnCode, self.log, message=msg)

def runAnt(engine, buildFile, target='default'):
	"""
	Run Ant on the specified buildfile and wait for it to complete; there is no timeout.

	@param engine: a `fxpackager.config.AntEngine`.
	@param buildFile: absolute path of the Ant buildfile.
	@return: the `AntProcessOutputHandler`, whose ``log`` holds the output of Ant.
	@raises PackagingFailure: if Ant exits with a non-zero status.
	"""
	env = None
	if engine.javaHome:
		env = {'JAVA_HOME': engine.javaHome}
	handler = AntProcessOutputHandler()
	try:
		call(list(engine.command)+['-noinput', '-buildfile', buildFile, target], env=env, cwd=os.path.dirname(buildFile),
			outputHandler=handler)
	except EnvironmentError:
		raise BuildException('Cannot run Ant; check the ant.command and ant.home settings', causedBy=True)
	return handler
