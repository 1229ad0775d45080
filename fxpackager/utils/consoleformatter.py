# fxpackager - JavaFX application packaging and deployment
#
# Handlers for formatting stdout
#
# Copyright (c) 2019 The fxpackager authors
#
# Derived from xpybuild, Copyright (c) 2015 - 2019 Software AG, Darmstadt, Germany and/or its licensors
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
Pluggable classes for customizing the format that fxpackager uses when writing log messages to stdout (for example,
for editors that understand GNU make output).
"""

import logging

_registeredConsoleFormatters = {}

class ConsoleFormatter(object):
	"""
	Base class for customizing the format used
	for handling log records when displaying to the command console/stdout.

	Use self.fmt.format(record) to format the message including (multi-line) python
	exception traces.

	This class is only used for stdout, it does not affect the format used
	to write messages to the on-disk log file.
	"""

	level = logging.ERROR

	def __init__(self, output, **kwargs):
		"""
		@param output: The output stream, which can cope with unicode characters.
		"""
		super().__init__()
		self.output = output
		self.fmt = logging.Formatter()

	def setLevel(self, level):
		self.level = level
	def handle(self, record):
		raise NotImplementedError("Not Implemented")

def registerConsoleFormatter(name: str, handler):
	"""
	Make a custom console formatter class available for use with the ``--format`` option.
	"""
	_registeredConsoleFormatters[name] = handler

def getConsoleFormatter(name: str):
	"""
	Returns the console formatter class registered with the specified name, or None.
	"""
	return _registeredConsoleFormatters.get(name)

def getConsoleFormatterNames():
	return sorted(_registeredConsoleFormatters.keys())

class DefaultConsoleFormatter(ConsoleFormatter):
	"""
	The default text output formatter. Progress messages (starting with ``***``) are written as-is, everything
	else is prefixed with the level name.
	"""
	def __init__(self, stream, **kwargs):
		ConsoleFormatter.__init__(self, stream, **kwargs)
		self.delegate = logging.StreamHandler(stream)
		self.delegate.setFormatter(_DefaultFormatter())
	def handle(self, record):
		self.delegate.handle(record)
	def setLevel(self, level):
		ConsoleFormatter.setLevel(self, level)
		self.delegate.setLevel(level)

class _DefaultFormatter(logging.Formatter):
	def __init__(self):
		logging.Formatter.__init__(self, '[%(levelname)s] %(message)s')
		self.__progressFormatter = logging.Formatter('%(message)s')
	def format(self, record):
		if record.levelno == logging.CRITICAL and record.getMessage().startswith('***'):
			return self.__progressFormatter.format(record)
		return logging.Formatter.format(self, record)

class MakeConsoleFormatter(ConsoleFormatter):
	"""
	ConsoleFormatter that logs in a format that matches GNU Make.

	Output format::

		location: category: description

	"""
	def handle(self, record):
		if record.levelno == logging.ERROR:
			category = 'error'
		elif record.levelno == logging.WARNING:
			category = 'warning'
		else:
			category = None

		location = getattr(record, 'fxpackager_location', None) or 'fxpackager'

		if category:
			self.output.write("%s: %s: %s\n" % (location, category, self.fmt.format(record)))
		else:
			self.output.write("%s\n" % self.fmt.format(record))

		self.output.flush()

registerConsoleFormatter("make", MakeConsoleFormatter)

registerConsoleFormatter("default", DefaultConsoleFormatter)
