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
Copies a packaged application into a deployment directory.
"""

import os
import collections
import logging

from fxpackager.utils.buildexceptions import DeployDirNotConfiguredError, DeployFailure
from fxpackager.utils.fileutils import copyTree

log = logging.getLogger('deploy')

DeployResult = collections.namedtuple('DeployResult', ['deployedDir', 'filesCopied'])

def deploy(outputDir, deployTargetDir, artifactBaseNameValue):
	"""
	Recursively copy outputDir into ``<deployTargetDir>/<artifactBaseNameValue>``, overwriting existing files and
	preserving modification times.

	@return: a `DeployResult`.
	@raises DeployDirNotConfiguredError: if deployTargetDir is not set. Nothing is copied.
	@raises DeployFailure: if outputDir does not exist or the copy fails.
	"""
	if not deployTargetDir:
		raise DeployDirNotConfiguredError()
	if not os.path.isdir(outputDir):
		raise DeployFailure('Cannot deploy since the packaged application does not exist: %s'%outputDir)

	dest = os.path.join(deployTargetDir, artifactBaseNameValue)
	log.critical('*** Deploying %s to %s', artifactBaseNameValue, dest)
	try:
		copied = copyTree(outputDir, dest)
	except (OSError, IOError):
		raise DeployFailure('Failed to deploy %s to %s'%(outputDir, dest), causedBy=True)
	log.info('Copied %d file(s) to %s', copied, dest)
	return DeployResult(dest, copied)
