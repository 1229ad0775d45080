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
Resolves `fxpackager.settings.Settings` into an immutable `PackagingConfig`, applying defaults and checking
that the combination of settings makes sense before anything is written to disk.

The only filesystem access performed here is checking that the JavaFX SDK is present.
"""

import os, shutil
import collections
import logging

from fxpackager.buildcommon import IS_WINDOWS, ANT_JAVAFX_LIBRARY
from fxpackager.utils.buildexceptions import ConfigError, MissingSdkError, IncompleteSigningConfigError

log = logging.getLogger('config')

ModuleId = collections.namedtuple('ModuleId', ['organization', 'name', 'revision'])
""" Identity of the project being packaged. """

ArtifactId = collections.namedtuple('ArtifactId', ['name', 'type', 'extension'])
""" Identity of the main artifact (the application jar). """

Output = collections.namedtuple('Output', ['artifactBaseName', 'artifactBaseNameValue', 'deployDir'])
Template = collections.namedtuple('Template', ['file', 'destFile', 'placeholderId'])
Dimensions = collections.namedtuple('Dimensions', ['width', 'height', 'embeddedWidth', 'embeddedHeight'])
Permissions = collections.namedtuple('Permissions', ['elevated', 'cacheCertificates'])
Signing = collections.namedtuple('Signing', ['keyStore', 'storePass', 'alias', 'keyPass', 'storeType'])

PackagingConfig = collections.namedtuple('PackagingConfig', ['sdkDir', 'mainClass', 'javaOnly', 'projectName',
	'output', 'template', 'dimensions', 'permissions', 'signing'])
"""
The resolved packaging configuration; created once per invocation and never modified.

If ``permissions.elevated`` is True all signing fields except the store type are guaranteed to be set.
``template.destFile`` is only None if ``template.file`` is None.
"""

BuildInputs = collections.namedtuple('BuildInputs', ['baseDir', 'classesDir', 'outputRootDir', 'classpath'])
""" The project base directory, compiled classes directory, output root directory and classpath entries
(absolute paths) for one invocation. """

AntEngine = collections.namedtuple('AntEngine', ['command', 'javaHome'])
""" The command line used to start Ant (a list), and the Java installation to run it with (or None to inherit
JAVA_HOME from the environment). """

DEFAULT_STORE_TYPE = 'jks'

class DefaultArtifactBaseName(object):
	""" The default naming function for the output jar and directories:
	``<artifact name>[_<cross version>]-<revision>``.

	The cross-version suffix is only added if cross-versioned paths are enabled (i.e. the application is not
	Java-only) and a cross version is configured.

	>>> DefaultArtifactBaseName(True)('2.10', ModuleId('org', 'demo', '1.0'), ArtifactId('demo', 'jar', 'jar'))
	'demo_2.10-1.0'
	>>> DefaultArtifactBaseName(False)('2.10', ModuleId('org', 'demo', '1.0'), ArtifactId('demo', 'jar', 'jar'))
	'demo-1.0'
	>>> DefaultArtifactBaseName(True)(None, ModuleId('org', 'demo', '1.0'), ArtifactId('demo', 'jar', 'jar'))
	'demo-1.0'
	"""
	def __init__(self, crossPaths):
		self.crossPaths = crossPaths
	def __repr__(self):
		return 'DefaultArtifactBaseName<crossPaths=%s>'%self.crossPaths
	def __call__(self, version, moduleId, artifactId):
		name = artifactId.name
		if self.crossPaths and version: name += '_'+version
		return name+'-'+moduleId.revision

def resolve(settings):
	"""
	Merge the user's settings with the defaults and validate them.

	@param settings: a `fxpackager.settings.Settings` instance.
	@return: a `PackagingConfig`.
	@raises ConfigError: if the settings are invalid; `MissingSdkError` if the SDK does not contain the JavaFX Ant
		tasks; `IncompleteSigningConfigError` if elevated permissions are requested without complete signing settings.
	"""
	mainClass = settings.getValue('main-class')
	if not mainClass:
		raise ConfigError('The main-class setting must be set to the fully qualified name of the application main class')
	sdkDir = settings.getValue('sdk-dir')
	if not sdkDir:
		raise ConfigError('The sdk-dir setting must be set to the JavaFX SDK directory')
	antLibrary = os.path.join(sdkDir, ANT_JAVAFX_LIBRARY)
	if not os.path.isfile(antLibrary):
		raise MissingSdkError(os.path.normpath(antLibrary))

	javaOnly = settings.getValue('java-only')
	projectName = settings.getValue('project.name') or os.path.basename(settings.baseDir)

	artifactBaseName = settings.getValue('output.artifact-base-name') or DefaultArtifactBaseName(crossPaths=not javaOnly)
	artifactBaseNameValue = settings.getValue('output.artifact-base-name-value')
	if not artifactBaseNameValue:
		moduleId = ModuleId(settings.getValue('project.organization') or '', projectName, settings.getValue('project.version'))
		artifactBaseNameValue = artifactBaseName(settings.getValue('project.cross-version'), moduleId, ArtifactId(projectName, 'jar', 'jar'))
		if not artifactBaseNameValue or not isinstance(artifactBaseNameValue, str):
			raise ConfigError('The output.artifact-base-name function %r returned an invalid name: %r'%(artifactBaseName, artifactBaseNameValue))
	if '/' in artifactBaseNameValue or '\\' in artifactBaseNameValue:
		raise ConfigError('The artifact base name must not contain path separators: "%s"'%artifactBaseNameValue)
	log.info('Artifact base name is: %s', artifactBaseNameValue)

	output = Output(artifactBaseName, artifactBaseNameValue, settings.getValue('output.deploy-dir'))

	templateFile = settings.getValue('template.file')
	templateDest = settings.getValue('template.dest-file')
	if templateDest and not templateFile:
		log.warning('Ignoring template.dest-file since no template.file is set')
		templateDest = None
	template = Template(templateFile, templateDest or templateFile, settings.getValue('template.placeholder-id'))

	dimensions = Dimensions(settings.getValue('dimensions.width'), settings.getValue('dimensions.height'),
		settings.getValue('dimensions.embedded-width'), settings.getValue('dimensions.embedded-height'))

	permissions = Permissions(settings.getValue('permissions.elevated'), settings.getValue('permissions.cache-certificates'))

	signing = Signing(
		keyStore=settings.getValue('signing.key-store'),
		storePass=settings.getValue('signing.store-pass'),
		alias=settings.getValue('signing.alias'),
		keyPass=settings.getValue('signing.key-pass'),
		storeType=settings.getValue('signing.store-type'),
	)
	if permissions.elevated:
		for field, setting in [('keyStore', 'signing.key-store'), ('storePass', 'signing.store-pass'), ('alias', 'signing.alias'), ('keyPass', 'signing.key-pass')]:
			if not getattr(signing, field):
				raise IncompleteSigningConfigError(setting)
		if not signing.storeType:
			signing = signing._replace(storeType=DEFAULT_STORE_TYPE)

	return PackagingConfig(
		sdkDir=sdkDir,
		mainClass=mainClass,
		javaOnly=javaOnly,
		projectName=projectName,
		output=output,
		template=template,
		dimensions=dimensions,
		permissions=permissions,
		signing=signing,
	)

def resolveBuildInputs(settings, config):
	"""
	Resolve the inputs that come from the build rather than from the packaging configuration.

	Unless the application is Java-only, the language runtime libraries listed in ``project.language-libraries``
	are added to the end of the classpath.

	@return: a `BuildInputs`.
	"""
	classpath = list(settings.getValue('build.classpath') or [])
	if not config.javaOnly:
		for lib in settings.getValue('project.language-libraries') or []:
			if lib not in classpath: classpath.append(lib)
	return BuildInputs(
		baseDir=settings.baseDir,
		classesDir=settings.getValue('build.classes-dir'),
		outputRootDir=settings.getValue('build.output-dir'),
		classpath=classpath,
	)

def resolveAntEngine(settings):
	"""
	Work out how to run Ant: ``ant.command`` if set, else the launcher script under ``ant.home``, else ``ant``
	from the PATH.

	@return: an `AntEngine`.
	@raises ConfigError: if Ant cannot be found.
	"""
	command = settings.getValue('ant.command')
	if not command:
		antHome = settings.getValue('ant.home')
		if antHome:
			launcher = os.path.join(antHome, 'bin', 'ant.bat' if IS_WINDOWS else 'ant')
			if not os.path.isfile(launcher):
				raise ConfigError('Cannot find Ant launcher %s; check the ant.home setting'%launcher)
		else:
			launcher = shutil.which('ant')
			if not launcher:
				raise ConfigError('Cannot find ant on the PATH; set ant.home or ant.command')
		command = [launcher]
	return AntEngine(command, settings.getValue('java.home'))

def runMainClass(config):
	""" The class used to launch the application directly: the main class for Java-only applications, otherwise the
	generated launcher class.

	>>> runMainClass(PackagingConfig(None, 'demo.Main', True, None, None, None, None, None, None))
	'demo.Main'
	>>> runMainClass(PackagingConfig(None, 'demo.Main', False, None, None, None, None, None, None))
	'demo.MainLauncher'
	"""
	if config.javaOnly: return config.mainClass
	return config.mainClass+'Launcher'
