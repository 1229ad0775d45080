# fxpackager - JavaFX application packaging and deployment
#
# Copyright (c) 2019 The fxpackager authors
#
# Derived from xpybuild, Copyright (c) 2014 - 2019 Software AG, Darmstadt, Germany and/or its licensors
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
Contains `fxpackager.utils.outputhandler.ProcessOutputHandler`, which turns the output of a child process such as
Ant into log records and decides whether the process failed.
"""

import re, logging
from fxpackager.utils.buildexceptions import BuildException

_logger = logging.getLogger('processoutput')

class ProcessOutputHandler(object):
	"""
	Handles the stdout/stderr lines and return code of a child process, collecting errors and warnings and
	logging each line to the ``processoutput`` logger with the process name as a prefix.

	Usage: `handleLine` is called for every line of stdout then stderr, after which `handleEnd` is called once with
	the return code. handleEnd raises a `fxpackager.utils.buildexceptions.BuildException` if the process failed.
	Lines are character strings; the caller decodes the process's bytes.

	Subclasses such as `fxpackager.utils.ant.AntProcessOutputHandler` override `_decideLogLevel` and
	`_parseLocationFromLine` for a particular tool.

	>>> h = ProcessOutputHandler('javapackager')
	>>> h.handleLine(u'error: no main class')
	>>> h.handleLine(u'error: missing manifest')
	>>> len(h.getErrors())
	2
	>>> h.handleEnd(2)
	Traceback (most recent call last):
	...
	fxpackager.utils.buildexceptions.BuildException: 2 errors, first is: error: no main class

	>>> h = ProcessOutputHandler('javapackager')
	>>> h.handleLine(u'Creating jar')
	>>> h.handleLine(u'  Signing   ')
	>>> h.handleEnd(3)
	Traceback (most recent call last):
	...
	fxpackager.utils.buildexceptions.BuildException: javapackager failed with return code 3; no errors reported, last line was: Signing

	>>> h = ProcessOutputHandler('javapackager', treatStdErrAsErrors=False)
	>>> h.handleLine(u'Picked up JAVA_TOOL_OPTIONS: -Xmx1g', isstderr=True)
	>>> h.handleEnd(0)
	"""

	def __init__(self, name, treatStdErrAsErrors=True):
		"""
		@param name: a short display name for the process, used as a prefix for log lines.

		@param treatStdErrAsErrors: whether every stderr line is an error. This depends on how the
			process uses stdout and stderr.
		"""
		self._name = name
		self._errors = []
		self._warnings = []
		self._lastLine = ''

		self._logger = _logger
		self._treatStdErrAsErrors = treatStdErrAsErrors

	def handleLine(self, line:str, isstderr=False):
		"""
		Called once for every line in the stdout and stderr.

		Uses `_decideLogLevel()` to classify the line, then `_preprocessLine()` and `_parseLocationFromLine()` before
		recording errors and warnings and passing the line to `_log()`.

		@param isstderr: True if the line came from stderr.
		"""
		self._lastLine = line # in case it helps us give an error message

		level = self._decideLogLevel(line, isstderr)
		if not level: return

		if level >= logging.WARNING or self._logger.isEnabledFor(level):
			line = self._preprocessLine(line)
			filename, fileline, col, line = self._parseLocationFromLine(line)

			if level == logging.ERROR:
				self._errors.append(line)
			elif level == logging.WARNING:
				self._warnings.append(line)
			self._log(level, line, filename, fileline, col)

	def handleEnd(self, returnCode=None):
		"""
		Called when the process has terminated. Logs the number of warnings, then raises a
		``BuildException`` if there were any errors or ``returnCode`` is non-zero. The message holds the first error,
		or else the first warning or the last line of output.
		"""
		if self._warnings: self._logger.warning('%d warnings during %s', len(self._warnings), self._name)

		if self._errors:
			msg = self._errors[0]
			if len(self._errors)>1:
				msg = '%d errors, first is: %s'%(len(self._errors), msg)
		elif returnCode:
			msg = '%s failed with return code %s'%(self._name, returnCode)
			if self._warnings:
				msg += '; no errors reported, first warning was: %s'%self._warnings[0]
			elif self.getLastOutputLine():
				msg += '; no errors reported, last line was: %s'%self.getLastOutputLine()
			else:
				msg += ' and no output generated'
		else:
			return
		raise BuildException(msg)

	def _decideLogLevel(self, line: str, isstderr: bool) -> int:
		"""
		Decides whether the raw line is an error, a warning, or information. Called exactly once per line.

		Lines matching ``error:`` (optionally with a code such as ``error E12:``) are errors, as is all stderr output
		when treatStdErrAsErrors is set; ``warning:`` lines are warnings; everything else is INFO.

		@return: ``logging.ERROR``, ``logging.WARNING``, ``logging.INFO``/``DEBUG``, or None to ignore the line.
		"""
		assert isinstance(line, str), 'ProcessOutputHandler does not accept bytes - caller must decode bytes to a character str'

		if (isstderr and self._treatStdErrAsErrors) or re.search(r'error[\s]*([A-Z]+\d+)?:', line, flags=re.IGNORECASE): return logging.ERROR
		if re.search(r'warning[\s]*([A-Z]+\d+)?:', line, flags=re.IGNORECASE): return logging.WARNING
		return logging.INFO

	def _parseLocationFromLine(self, line):
		"""
		Extracts a file location from the line, for the console formatter to show with warnings and errors.

		@return: (filename, linenumber, col, line), where line may have the location removed.
		"""
		return None,None,None,line

	def _log(self, level: int, msg: str, filename=None, fileline=None, filecol=None):
		""" Writes the msg to the ``processoutput`` logger, attaching the location (if any) as
		``record.fxpackager_location``.
		"""
		if level == logging.ERROR:
			pattern = '%s ERROR> %s'
		elif level == logging.WARNING:
			pattern = '%s WARN> %s'
		else:
			pattern = '%s> %s'
		r = self._logger.makeRecord(self._logger.name, level, filename, fileline,
			pattern, (self._name, msg), exc_info=None, func=self._name)
		if filename:
			r.fxpackager_location = filename
			if fileline:
				r.fxpackager_location += ':%s'%fileline
		self._logger.handle(r)

	def _preprocessLine(self, line: str):
		""" Strips whitespace from the line before it is logged or stored. """
		return line.strip()

	def getErrors(self): return self._errors
	def getWarnings(self): return self._warnings
	def getLastOutputLine(self): return self._preprocessLine(self._lastLine)
