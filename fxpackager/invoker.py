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
Carries out a `fxpackager.descriptor.Descriptor`: removes the previous build, stages the library archives, writes
the Ant buildfile and runs Ant.
"""

import os
import collections
import logging

from fxpackager.utils.buildexceptions import BuildException, StalePreviousBuildError
from fxpackager.utils.fileutils import mkdir, deleteDir, copyFile
from fxpackager.utils import ant
from fxpackager import antbuildfile

log = logging.getLogger('invoker')

InvocationResult = collections.namedtuple('InvocationResult', ['outputDir', 'buildFile', 'exitCode', 'log'])
""" The result of a successful packaging run. ``exitCode`` and ``log`` are None if Ant was not run. """

def clean(descriptor):
	"""
	Delete the output of a previous build: the output directory and the library staging directory.

	@raises StalePreviousBuildError: if either directory could not be deleted completely.
	"""
	for path in [descriptor.outputDir, descriptor.libraryDir]:
		try:
			deleteDir(path)
		except OSError:
			raise StalePreviousBuildError(path, causedBy=True)
		if os.path.isdir(path) and os.listdir(path):
			raise StalePreviousBuildError(path)

def stageLibraries(descriptor):
	""" Copy the library archives into the library staging directory, preserving modification times. """
	mkdir(descriptor.libraryDir)
	for lib in descriptor.libraries:
		if not os.path.isfile(lib):
			raise BuildException('Cannot find library archive on the classpath: %s'%lib)
		copyFile(lib, os.path.join(descriptor.libraryDir, os.path.basename(lib)))
	if descriptor.libraries:
		log.info('Staged %d library archive(s) in %s', len(descriptor.libraries), descriptor.libraryDir)

def invoke(descriptor, engine, dryRun=False):
	"""
	Package the application described by the descriptor.

	Runs synchronously; Ant is given as long as it needs.

	@param descriptor: the `fxpackager.descriptor.Descriptor`.
	@param engine: the `fxpackager.config.AntEngine` used to run Ant; may be None if dryRun is True.
	@param dryRun: if True, do everything except running Ant.
	@return: an `InvocationResult`.
	@raises StalePreviousBuildError: if the previous build could not be removed; Ant is not run.
	@raises PackagingFailure: if Ant fails.
	"""
	clean(descriptor)
	stageLibraries(descriptor)
	buildFile = antbuildfile.write(descriptor)

	if dryRun:
		log.critical('*** Dry run: not running Ant; buildfile is %s', buildFile)
		return InvocationResult(descriptor.outputDir, buildFile, None, None)

	mkdir(descriptor.outputDir)
	log.critical('*** Packaging %s to %s', descriptor.projectName, descriptor.outputDir)
	handler = ant.runAnt(engine, buildFile)
	return InvocationResult(descriptor.outputDir, buildFile, 0, handler.log)
