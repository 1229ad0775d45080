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
The packaging descriptor: plain, immutable data describing what the JavaFX packaging tasks should do, in the order
they should do it. `build` creates it from a `fxpackager.config.PackagingConfig`; `fxpackager.antbuildfile`
turns it into an Ant buildfile.

Output layout under the output root directory::

	lib/                   library archives, staged before packaging
	<artifactBaseName>/    the packaged application
	build.xml              the generated Ant buildfile
"""

import os
import collections
import logging

from fxpackager.buildcommon import RUNTIME_LIBRARY_NAME, ANT_JAVAFX_LIBRARY
from fxpackager.config import DEFAULT_STORE_TYPE

log = logging.getLogger('descriptor')

APPLICATION_ID = 'fxApp'
RESOURCES_ID = 'fxRes'
ARCHIVE_EXTENSIONS = ('.jar', '.zip')

ApplicationInstruction = collections.namedtuple('ApplicationInstruction', ['id', 'name', 'mainClass'])
ResourcesInstruction = collections.namedtuple('ResourcesInstruction', ['id', 'libraryDir', 'libraries'])
""" The application's library archives, as file names relative to libraryDir. The compiled classes go in through JarInstruction. """
JarInstruction = collections.namedtuple('JarInstruction', ['destFile', 'applicationRef', 'classesDir', 'resourcesRef'])
SignJarInstruction = collections.namedtuple('SignJarInstruction', ['dir', 'keyStore', 'storePass', 'alias', 'keyPass', 'storeType'])
""" Sign every archive in dir, in place. """
PermissionsInstruction = collections.namedtuple('PermissionsInstruction', ['elevated', 'cacheCertificates'])
TemplateInstruction = collections.namedtuple('TemplateInstruction', ['file', 'toFile', 'placeholderId'])
DeployInstruction = collections.namedtuple('DeployInstruction', ['width', 'height', 'embeddedWidth', 'embeddedHeight',
	'outDir', 'outFile', 'placeholderId', 'applicationRef', 'jarFile', 'libraryDir', 'libraries', 'permissions', 'template'])
""" Generate the deployment descriptors (JNLP and HTML). template is None unless a template is configured. """

_DescriptorBase = collections.namedtuple('Descriptor', ['projectName', 'antLibrary', 'outputRootDir', 'outputDir',
	'outputJar', 'libraryDir', 'buildFile', 'libraries', 'application', 'resources', 'jar', 'signing', 'deploy'])

class Descriptor(_DescriptorBase):
	"""
	The complete packaging descriptor for one invocation.

	``libraries`` holds the absolute paths of the library archives to stage into ``libraryDir`` before packaging;
	``signing`` is a (possibly empty) tuple of `SignJarInstruction`.
	"""
	__slots__ = ()

	def instructions(self):
		""" Returns the packaging instructions in the order they must be carried out. """
		return [self.application, self.resources, self.jar]+list(self.signing)+[self.deploy]

def isArchive(path):
	"""
	>>> isArchive('lib/foo.jar'), isArchive('foo.ZIP'), isArchive('classes')
	(True, True, False)
	"""
	return path.lower().endswith(ARCHIVE_EXTENSIONS)

def filterLibraries(classpathEntries):
	"""
	Returns the classpath entries that should be packaged with the application: archives only, never the JavaFX
	runtime library. If two archives have the same file name only the first is kept.

	>>> filterLibraries(['/a/x.jar', '/sdk/rt/lib/jfxrt.jar', '/b/classes', '/c/x.jar', '/d/y.zip'])
	['/a/x.jar', '/d/y.zip']
	"""
	result = []
	names = {}
	for entry in classpathEntries:
		name = os.path.basename(entry)
		if not isArchive(name) or name.endswith(RUNTIME_LIBRARY_NAME): continue
		if name in names:
			log.warning('Ignoring library %s since an archive with the same name is already included: %s', entry, names[name])
			continue
		names[name] = entry
		result.append(entry)
	return result

def build(config, classpathEntries, compiledClassesDir, outputRootDir, baseDir):
	"""
	Build the packaging descriptor.

	Identical arguments always produce an identical descriptor.

	@param config: the `fxpackager.config.PackagingConfig`.
	@param classpathEntries: the application's classpath; only library archives are used.
	@param compiledClassesDir: the directory containing the application's compiled classes.
	@param outputRootDir: the directory all packaging output is written under.
	@param baseDir: the project directory; a relative template file is resolved against it.
	@return: a `Descriptor`.
	"""
	outputRootDir = os.path.normpath(outputRootDir)
	name = config.output.artifactBaseNameValue
	outputDir = os.path.join(outputRootDir, name)
	outputJar = os.path.join(outputDir, name+'.jar')
	libraryDir = os.path.join(outputRootDir, 'lib')

	libraries = filterLibraries(classpathEntries)
	libraryNames = tuple(os.path.basename(l) for l in libraries)

	application = ApplicationInstruction(APPLICATION_ID, config.projectName, config.mainClass)
	resources = ResourcesInstruction(RESOURCES_ID, libraryDir, libraryNames)
	jar = JarInstruction(outputJar, APPLICATION_ID, compiledClassesDir, RESOURCES_ID)

	signing = []
	if config.permissions.elevated:
		s = config.signing
		signingFields = (s.keyStore, s.storePass, s.alias, s.keyPass, s.storeType or DEFAULT_STORE_TYPE)
		signing.append(SignJarInstruction(outputDir, *signingFields))
		if libraryNames:
			signing.append(SignJarInstruction(libraryDir, *signingFields))

	template = None
	if config.template.file:
		template = TemplateInstruction(
			os.path.join(baseDir, config.template.file),
			os.path.join(outputDir, config.template.destFile),
			config.template.placeholderId)

	d = config.dimensions
	deploy = DeployInstruction(
		width=d.width, height=d.height, embeddedWidth=d.embeddedWidth, embeddedHeight=d.embeddedHeight,
		outDir=outputDir, outFile=name, placeholderId=config.template.placeholderId,
		applicationRef=APPLICATION_ID, jarFile=outputJar,
		libraryDir=libraryDir, libraries=libraryNames,
		permissions=PermissionsInstruction(config.permissions.elevated, config.permissions.cacheCertificates),
		template=template)

	return Descriptor(
		projectName=config.projectName,
		antLibrary=os.path.normpath(os.path.join(config.sdkDir, ANT_JAVAFX_LIBRARY)),
		outputRootDir=outputRootDir,
		outputDir=outputDir,
		outputJar=outputJar,
		libraryDir=libraryDir,
		buildFile=os.path.join(outputRootDir, 'build.xml'),
		libraries=tuple(libraries),
		application=application,
		resources=resources,
		jar=jar,
		signing=tuple(signing),
		deploy=deploy,
	)
