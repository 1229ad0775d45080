# buildexceptions - Holds the exception types raised for packaging problems
#
# Copyright (c) 2019 The fxpackager authors
#
# Derived from xpybuild, Copyright (c) 2013 - 2017, 2019 Software AG, Darmstadt, Germany and/or its licensors
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
The `fxpackager.utils.buildexceptions.BuildException` class used for (non-internal) problems encountered while
packaging, and its subclasses for each kind of failure.

All of these are fatal for the current invocation; nothing is retried.
"""

import traceback, os, sys

class BuildException(Exception):
	""" A BuildException represents an error caused by incorrect settings or a runtime packaging problem. i.e. anything
	that isn't an internal fxpackager error.

	Typically a BuildException will not result in a python stack trace being
	printed whereas other exception types will, so only raise one if you're
	sure the message includes all required diagnostic information already.
	"""

	def __init__(self, message, location=None, causedBy=False):
		"""
		To avoid losing essential diagnostic information, do not catch arbitrary
		non-BuildException classes and wrap in a BuildException unless causedBy=True is passed.

		@param message: the error cause

		@param location: usually None, or else a string identifying the settings source that caused the problem,
		for example ``fxpackager.properties:12``.

		@param causedBy: if True, takes the exception currently on the stack as the cause of this exception, and
		adds it to the build exception message. If the cause is not a BuildException, then its stack
		trace will be captured if this is True.
		"""
		assert message
		self.__msg = message.strip()
		self.cause = None

		if causedBy:
			causedBy = sys.exc_info()
			causedByExc = causedBy[1]
			self.cause = causedByExc

			if isinstance(causedByExc, BuildException):
				causedByMsg = causedByExc.__msg
				if not location: location = causedByExc.__location
				self.__causedByTraceback = None # tracebacks not needed for BuildException, by definition
			else:
				causedByMsg = '%s'%causedByExc
				self.__causedByTraceback = ''.join(traceback.format_exception(*causedBy))

			if (causedByMsg not in self.__msg): self.__msg += (': %s'%causedByMsg)

		else:
			assert causedBy==False
			self.__causedByTraceback = None

		self.__location = location or None

		Exception.__init__(self, self.__msg)

	@property
	def location(self):
		""" The settings source location associated with this error, or None. """
		return self.__location

	def getLoggerExtraArgDict(self):
		"""
		Returns a dict suitable for passing as extra= in a logger call, to set
		the location information if available.
		"""
		if self.__location:
			return {'fxpackager_location':self.__location}
		return {}

	def __repr__(self):
		""" Return the type of the exception and the message on a single line"""
		return '%s<%s>'%(type(self).__name__, self.toSingleLineString())
	def __str__(self):
		""" Return the exception message on a single line """
		return self.toSingleLineString()

	def toSingleLineString(self):
		""" Return the exception message formatted to be a single line, including the location if there is one.
		"""
		result = self.__msg

		if self.__location and not str(self.__location) in result:
			result = '%s : %s'%(self.__location, result)

		return result

	def toMultiLineString(self, includeStack=False):
		""" Return the exception message, on multiple lines if necessary, possibly including the stack trace of the
		cause.

		@param includeStack: If true, also includes the stack trace of the exception.
		"""
		result = self.__msg

		if self.__location:
			result += '\n  at %s'%self.__location

		if self.__causedByTraceback and includeStack:
			result = result + '\n\nCaused by:\n%s'%(self.__causedByTraceback)
		return result.strip()

class ConfigError(BuildException):
	""" The packaging settings are invalid or incomplete. Raised before anything is written to disk. """

class MissingSdkError(ConfigError):
	""" The JavaFX SDK directory does not contain the JavaFX Ant tasks library.

	@ivar path: the library path that was expected to exist.
	"""
	def __init__(self, path):
		self.path = path
		ConfigError.__init__(self, 'JavaFX Ant tasks library not found at %s; check that sdk-dir points to a JavaFX SDK'%path)

class IncompleteSigningConfigError(ConfigError):
	""" Elevated permissions were requested, but a signing setting is missing.

	@ivar field: the name of the first missing setting, e.g. ``signing.key-store``.
	"""
	def __init__(self, field):
		self.field = field
		ConfigError.__init__(self, 'Elevated permissions require the application to be signed, but %s is not set'%field)

class StalePreviousBuildError(BuildException):
	""" The output of a previous build could not be removed.

	@ivar path: the directory that could not be cleaned.
	"""
	def __init__(self, path, causedBy=False):
		self.path = path
		BuildException.__init__(self, 'Could not delete previous build %s; make sure no other program is using the files in it'%path,
			causedBy=causedBy)

class PackagingFailure(BuildException):
	""" The JavaFX packaging engine (Ant) completed with a non-zero exit status.

	@ivar exitCode: the exit status of the engine.
	@ivar log: the complete console output of the engine, verbatim.
	"""
	def __init__(self, exitCode, log, message=None):
		self.exitCode = exitCode
		self.log = log
		BuildException.__init__(self, message or 'Ant packaging failed with exit code %s'%exitCode)

class DeployDirNotConfiguredError(ConfigError):
	""" The deploy operation was requested but output.deploy-dir is not set. """
	def __init__(self):
		ConfigError.__init__(self, 'Cannot deploy because output.deploy-dir is not set')

class DeployFailure(BuildException):
	""" Copying the packaged application into the deploy directory failed.

	The underlying error is available as ``cause``.
	"""
	def __init__(self, message, causedBy=False):
		BuildException.__init__(self, message, causedBy=causedBy)
