# fxpackager - JavaFX application packaging and deployment
#
# Copyright (c) 2019 The fxpackager authors
#
# Derived from xpybuild, Copyright (c) 2013 - 2019 Software AG, Darmstadt, Germany and/or its licensors
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
The packaging settings, and the sources they can be read from.

Every setting that fxpackager understands is defined in this module with a type and a default value, using
`defineStringSetting`, `definePathSetting`, `defineBooleanSetting` and friends. Values can come from:

	- a ``.properties`` file (``key=value`` lines, ``#`` comments)
	- environment variables named ``FXPACKAGER_<KEY>``, where the key is upper-cased and ``.`` and ``-`` are replaced
	  by ``_`` (e.g. ``FXPACKAGER_SDK_DIR``)
	- ``key=value`` arguments on the command line, or a dictionary when used programmatically

Command line values take precedence over environment variables, which take precedence over the settings file, which
takes precedence over the defaults.

Values may refer to other settings using ``${name}`` syntax; use ``$${`` for a literal ``${``.
"""

import os, re, shlex, importlib
import collections
import logging

from fxpackager.buildcommon import formatFileLocation
from fxpackager.utils.buildexceptions import ConfigError
from fxpackager.utils.fileutils import parsePropertiesFile
from fxpackager.utils.flatten import splitPathList

log = logging.getLogger('settings')

ENVIRONMENT_PREFIX = 'FXPACKAGER_'

SettingDefinition = collections.namedtuple('SettingDefinition', ['name', 'default', 'coerce', 'description', 'secret'])
""" The name, default value, conversion function and documentation for a setting. """

_definitions = collections.OrderedDict()

def _defineSetting(name, default, coerce, description, secret=False):
	assert name not in _definitions, name
	_definitions[name] = SettingDefinition(name, default, coerce, description, secret)

def defineStringSetting(name, default, description, secret=False):
	""" Define a string setting. An empty value is the same as not setting it.

	@param secret: True if the value should never be displayed, e.g. passwords.
	"""
	def _coerceToValidValue(settings, value):
		return str(settings.expandValue(value)) or None
	_defineSetting(name, default, _coerceToValidValue, description, secret=secret)

def definePathSetting(name, default, description):
	""" Define a setting that will be converted to an absolute, normalized path. Relative paths are resolved against
	the project base directory.
	"""
	def _coerceToValidValue(settings, value):
		value = settings.expandValue(value)
		if not value: return None
		return os.path.normpath(os.path.join(settings.baseDir, value))
	_defineSetting(name, default, _coerceToValidValue, description)

def definePathListSetting(name, default, description):
	""" Define a setting holding a list of paths, separated by commas or the platform path separator (or given as a
	list when used programmatically). Each path is made absolute against the project base directory.
	"""
	def _coerceToValidValue(settings, value):
		if isinstance(value, (list, tuple)):
			value = [settings.expandValue(v) for v in value]
		else:
			value = settings.expandValue(value)
		return [os.path.normpath(os.path.join(settings.baseDir, v)) for v in splitPathList(value)]
	_defineSetting(name, default, _coerceToValidValue, description)

def defineBooleanSetting(name, default, description):
	""" Define a setting that will have a True or False value. Accepts ``true`` or ``false`` in any case; an empty
	value means False.
	"""
	def _coerceToValidValue(settings, value):
		if isinstance(value, bool): return value
		value = settings.expandValue(str(value)).strip()
		if value.lower() == 'true':
			return True
		if value.lower() == 'false' or value=='':
			return False
		raise ConfigError('Invalid value for "%s" - must be true or false: "%s"'%(name, value), location=settings.getSource(name, location=True))
	_defineSetting(name, default, _coerceToValidValue, description)

def definePositiveIntegerSetting(name, default, description):
	""" Define a setting that must be an integer greater than zero. """
	def _coerceToValidValue(settings, value):
		if not isinstance(value, int) or isinstance(value, bool):
			value = settings.expandValue(str(value)).strip()
			try:
				value = int(value)
			except ValueError:
				raise ConfigError('Invalid value for "%s" - must be a positive integer: "%s"'%(name, value), location=settings.getSource(name, location=True))
		if value <= 0:
			raise ConfigError('Invalid value for "%s" - must be a positive integer: "%s"'%(name, value), location=settings.getSource(name, location=True))
		return value
	_defineSetting(name, default, _coerceToValidValue, description)

def defineCommandSetting(name, default, description):
	""" Define a setting holding a command line, which is split into arguments using shell quoting rules (or given
	as a list when used programmatically).
	"""
	def _coerceToValidValue(settings, value):
		if isinstance(value, (list, tuple)): return [settings.expandValue(v) for v in value]
		value = settings.expandValue(value)
		if os.sep == '/': return shlex.split(value) or None
		# posix rules would treat Windows path separators as escapes
		return [a[1:-1] if len(a)>1 and a[0]==a[-1]=='"' else a for a in shlex.split(value, posix=False)] or None
	_defineSetting(name, default, _coerceToValidValue, description)

def defineFunctionSetting(name, default, description):
	""" Define a setting whose value is a Python function. When given as a string the value must have the form
	``package.module:function`` and is imported.
	"""
	def _coerceToValidValue(settings, value):
		if callable(value): return value
		value = settings.expandValue(value)
		if not value: return None
		modulename, sep, fnname = value.partition(':')
		if not sep or not modulename or not fnname:
			raise ConfigError('Invalid value for "%s" - expecting "package.module:function": "%s"'%(name, value), location=settings.getSource(name, location=True))
		try:
			fn = getattr(importlib.import_module(modulename.strip()), fnname.strip())
		except (ImportError, AttributeError):
			raise ConfigError('Cannot load function for "%s" from "%s"'%(name, value), location=settings.getSource(name, location=True), causedBy=True)
		if not callable(fn):
			raise ConfigError('Invalid value for "%s" - "%s" is not a function'%(name, value), location=settings.getSource(name, location=True))
		return fn
	_defineSetting(name, default, _coerceToValidValue, description)

defineStringSetting('main-class', None, 'Fully qualified name of the application main class (required)')
definePathSetting('sdk-dir', None, 'JavaFX SDK directory containing lib/ant-javafx.jar (required)')
defineBooleanSetting('java-only', False, 'True if the application is written only in Java, so no language runtime libraries are bundled and no cross-version suffix is used')

defineFunctionSetting('output.artifact-base-name', None, 'Function (version, moduleId, artifactId) -> name used for the output jar and directories, as package.module:function')
defineStringSetting('output.artifact-base-name-value', None, 'Explicit output name, overriding output.artifact-base-name')
definePathSetting('output.deploy-dir', None, 'Directory the packaged application is copied into by the deploy operation')

defineStringSetting('template.file', None, 'HTML template to process, relative to the project base directory')
defineStringSetting('template.dest-file', None, 'Where to write the processed template, relative to the output directory (default: template.file)')
defineStringSetting('template.placeholder-id', 'javafx', 'Id of the HTML element the application is embedded in')

definePositiveIntegerSetting('dimensions.width', 800, 'Application width in pixels')
definePositiveIntegerSetting('dimensions.height', 600, 'Application height in pixels')
defineStringSetting('dimensions.embedded-width', '100%', 'Width when embedded in a web page, in pixels or percent')
defineStringSetting('dimensions.embedded-height', '100%', 'Height when embedded in a web page, in pixels or percent')

defineBooleanSetting('permissions.elevated', False, 'True if the application needs all permissions, which requires signing')
defineBooleanSetting('permissions.cache-certificates', False, 'True to cache the signing certificates in the deployment descriptor')

definePathSetting('signing.key-store', None, 'Keystore file used for signing')
defineStringSetting('signing.store-pass', None, 'Keystore password', secret=True)
defineStringSetting('signing.alias', None, 'Alias of the signing key')
defineStringSetting('signing.key-pass', None, 'Signing key password', secret=True)
defineStringSetting('signing.store-type', None, 'Keystore type (default: jks)')

defineStringSetting('project.name', None, 'Application name (default: name of the project base directory)')
defineStringSetting('project.organization', '', 'Organization that publishes the application')
defineStringSetting('project.version', '0.1-SNAPSHOT', 'Application version')
defineStringSetting('project.cross-version', None, 'Language version suffix for output names, e.g. 2.10')
defineStringSetting('project.base-dir', None, 'Project directory that relative paths are resolved against (default: directory of the settings file)')
definePathListSetting('project.language-libraries', None, 'Language runtime libraries bundled unless java-only is true')

definePathSetting('build.classes-dir', 'target/classes', 'Directory containing the compiled classes')
definePathListSetting('build.classpath', None, 'Library archives the application depends on')
definePathSetting('build.output-dir', 'target', 'Directory that packaging output is written to')

definePathSetting('ant.home', None, 'Apache Ant installation directory')
defineCommandSetting('ant.command', None, 'Command line used to run Ant (default: ant.home/bin/ant, or ant from the PATH)')
definePathSetting('java.home', None, 'Java installation used to run Ant (passed as JAVA_HOME)')

def getSettingDefinitions():
	""" Returns the definitions of all settings, in a stable order. """
	return list(_definitions.values())

def environmentVariableName(name):
	""" Returns the name of the environment variable that overrides the specified setting.

	>>> environmentVariableName('sdk-dir')
	'FXPACKAGER_SDK_DIR'
	>>> environmentVariableName('output.deploy-dir')
	'FXPACKAGER_OUTPUT_DEPLOY_DIR'
	"""
	return ENVIRONMENT_PREFIX+name.upper().replace('.', '_').replace('-', '_')

_EXPANSION = re.compile(r'\$(\$\{)|\$\{([^}]*)\}')

class Settings(object):
	"""
	The merged packaging settings for one invocation.

	Raw values are held together with the place they came from; typed values are produced on demand by
	`getValue`, which expands ``${...}`` references and converts the value to the type of the setting.

	>>> s = Settings(overrides={'project.name':'demo', 'project.version':'1.0', 'output.artifact-base-name-value':'${project.name}-${project.version}'}, environ={}, baseDir='/')
	>>> s.getValue('output.artifact-base-name-value')
	'demo-1.0'
	>>> s.getSource('project.name')
	'command line'
	>>> s.getValue('dimensions.width')
	800
	>>> s.expandValue('x$${project.name}x${project.name}')
	'x${project.name}xdemo'
	>>> Settings(overrides={'project.name':'${project.version}', 'project.version':'${project.name}'}, environ={}, baseDir='/').getValue('project.name')
	Traceback (most recent call last):
	...
	fxpackager.utils.buildexceptions.ConfigError: Cyclic reference to setting "project.name" in the value of "project.version"
	>>> Settings(overrides={'sdk_dir':'x'}, environ={}, baseDir='/')
	Traceback (most recent call last):
	...
	fxpackager.utils.buildexceptions.ConfigError: Unknown setting "sdk_dir" on the command line
	"""

	def __init__(self, settingsFile=None, environ=None, overrides=None, baseDir=None):
		"""
		@param settingsFile: path of a .properties file to read, or None.

		@param environ: the environment variables to read overrides from; defaults to os.environ.

		@param overrides: a dictionary of setting name to value, as given on the command line. Values are usually
			strings, but typed values (e.g. a function for output.artifact-base-name) are also accepted.

		@param baseDir: the directory used to resolve relative paths if project.base-dir is not set; defaults to the
			directory containing the settings file, or else the current directory.
		"""
		self.settingsFile = os.path.abspath(settingsFile) if settingsFile else None
		self.__raw = {}
		self.__sources = {}
		self.__locations = {}
		self.__cache = {}
		self.__expanding = () # names of the settings currently being expanded, to detect cycles

		if self.settingsFile:
			self.__readSettingsFile(self.settingsFile)

		if environ is None: environ = os.environ
		envNames = {environmentVariableName(name): name for name in _definitions}
		for k in sorted(environ):
			if not k.startswith(ENVIRONMENT_PREFIX): continue
			if k not in envNames:
				log.warning('Ignoring environment variable %s as it does not match any setting', k)
				continue
			self.__set(envNames[k], environ[k], 'environment variable %s'%k)
			log.info('Overriding setting from environment: %s=%s', envNames[k], self.getDisplayValue(envNames[k]))

		for k, v in (overrides or {}).items():
			if k not in _definitions:
				raise ConfigError('Unknown setting "%s" on the command line'%k)
			self.__set(k, v, 'command line')

		if baseDir is None:
			baseDir = os.path.dirname(self.settingsFile) if self.settingsFile else os.getcwd()
		self.baseDir = os.path.normpath(os.path.abspath(baseDir))
		baseDirSetting = self.getValue('project.base-dir')
		if baseDirSetting:
			self.baseDir = os.path.normpath(os.path.join(self.baseDir, baseDirSetting))
			self.__cache.clear() # paths may have been resolved against the old base dir

	def __readSettingsFile(self, path):
		if not os.path.isfile(path):
			raise ConfigError('Settings file does not exist: %s'%path)
		log.info('Reading settings from %s', path)
		with open(path, 'r', encoding='utf-8') as f:
			for key, value, lineNo in parsePropertiesFile(f):
				location = formatFileLocation(path, lineNo)
				if key not in _definitions:
					raise ConfigError('Unknown setting "%s"'%key, location=location)
				if key in self.__raw:
					raise ConfigError('Setting "%s" is defined more than once (also at %s)'%(key, self.__locations[key]), location=location)
				self.__set(key, value, location, location=location)

	def __set(self, name, value, source, location=None):
		self.__raw[name] = value
		self.__sources[name] = source
		if location:
			self.__locations[name] = location
		else:
			self.__locations.pop(name, None)

	def isSet(self, name):
		""" Returns True if a value for this setting was supplied by any source (rather than coming from the default).
		"""
		assert name in _definitions, name
		return name in self.__raw

	def getRawValue(self, name):
		""" Returns the value of the setting before expansion and type conversion. """
		assert name in _definitions, name
		return self.__raw.get(name, _definitions[name].default)

	def getSource(self, name, location=False):
		""" Returns a description of where the value of this setting came from.

		@param location: if True, returns the settings file location only, or None if the value did not come from
			the settings file (suitable for passing as the location of a `ConfigError`).
		"""
		if location: return self.__locations.get(name)
		return self.__sources.get(name, 'default')

	def getValue(self, name, _expanding=None):
		""" Returns the typed value of the specified setting, expanding any ``${...}`` references.

		@raises ConfigError: if the value is invalid, or refers to an unknown setting.
		"""
		if name not in _definitions:
			raise ConfigError('Unknown setting "%s"'%name)
		if name in self.__cache: return self.__cache[name]
		raw = self.getRawValue(name)
		if raw is None or raw == '': raw = _definitions[name].default
		if raw is None:
			value = None
		else:
			self.__expanding = (_expanding or ())+(name,)
			try:
				value = _definitions[name].coerce(self, raw)
			finally:
				self.__expanding = _expanding or ()
		self.__cache[name] = value
		return value

	def expandValue(self, value):
		""" Expand all ``${name}`` references to other settings in the specified string.

		Use a double dollar to escape if needed, e.g. "$${foo}" will end up as "${foo}".
		Boolean values are expanded to "true" or "false". Non-string values are returned unchanged.
		"""
		if not isinstance(value, str) or '$' not in value: return value
		expanding = self.__expanding
		location = self.getSource(expanding[-1], location=True) if expanding else None

		if re.search(r'(?<!\$)\$\{[^}]*$', value):
			raise ConfigError('Incorrectly formatted setting value "%s"'%value, location=location)

		def replace(match):
			if match.group(1): return '${'
			ref = match.group(2).strip()
			if ref in expanding:
				raise ConfigError('Cyclic reference to setting "%s" in the value of "%s"'%(ref, expanding[-1]), location=location)
			if ref not in _definitions:
				raise ConfigError('Setting "%s" is not defined'%ref, location=location)
			v = self.getValue(ref, _expanding=expanding)
			self.__expanding = expanding
			if isinstance(v, bool): return 'true' if v else 'false'
			if v is None: return ''
			if isinstance(v, list): return os.pathsep.join(v)
			return str(v)
		return _EXPANSION.sub(replace, value)

	def getDisplayValue(self, name):
		""" Returns the value of the setting formatted for display, with secrets masked. """
		raw = self.getRawValue(name)
		if _definitions[name].secret and raw:
			return '****'
		if raw is None: return ''
		if isinstance(raw, bool): return 'true' if raw else 'false'
		if isinstance(raw, (list, tuple)): return ','.join(raw)
		return str(raw)

	def describe(self):
		""" Returns a list of (name, displayValue, source) for every setting, in definition order. """
		return [(d.name, self.getDisplayValue(d.name), self.getSource(d.name)) for d in getSettingDefinitions()]
