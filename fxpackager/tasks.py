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
The ``package`` and ``deploy`` operations.

`planPackaging` does all the validation up front without touching the filesystem. Each step then runs to completion
before the next one starts, and the first failure stops the operation.
"""

import collections
import logging

from fxpackager import config as configresolver
from fxpackager import descriptor as descriptorbuilder
from fxpackager import invoker
from fxpackager import deploy
from fxpackager.utils.buildexceptions import DeployDirNotConfiguredError

log = logging.getLogger('tasks')

PackagingPlan = collections.namedtuple('PackagingPlan', ['config', 'descriptor', 'engine'])
""" The resolved configuration, the packaging descriptor and the `fxpackager.config.AntEngine` (None for a dry
run). """

def planPackaging(settings, forDeploy=False, dryRun=False):
	"""
	Resolve the configuration, build the descriptor and find Ant. Nothing is written to disk, so a configuration
	problem leaves the project exactly as it was.

	@param settings: the `fxpackager.settings.Settings`.
	@param forDeploy: if True, also check that the deploy directory is configured.
	@param dryRun: if True, Ant is not needed so is not looked for.
	@return: a `PackagingPlan`.
	@raises ConfigError: if the configuration is invalid.
	@raises DeployDirNotConfiguredError: if deploying and output.deploy-dir is not set.
	"""
	config = configresolver.resolve(settings)
	if forDeploy and not config.output.deployDir:
		raise DeployDirNotConfiguredError()
	inputs = configresolver.resolveBuildInputs(settings, config)
	descriptor = descriptorbuilder.build(config, inputs.classpath, inputs.classesDir, inputs.outputRootDir, inputs.baseDir)
	engine = None if dryRun else configresolver.resolveAntEngine(settings)
	return PackagingPlan(config, descriptor, engine)

def packageApplication(settings, dryRun=False, plan=None):
	"""
	Package the application: resolve the configuration, build the descriptor and run Ant.

	@param settings: the `fxpackager.settings.Settings`.
	@param dryRun: if True, write the Ant buildfile but do not run Ant.
	@param plan: a `PackagingPlan` from `planPackaging`, or None to create one.
	@return: a `fxpackager.invoker.InvocationResult`.
	"""
	plan = plan or planPackaging(settings, dryRun=dryRun)
	return invoker.invoke(plan.descriptor, plan.engine, dryRun=dryRun)

def deployApplication(settings, dryRun=False, plan=None):
	"""
	Package the application and copy the result into the deploy directory.

	The deploy directory must be configured; this is checked before anything is packaged.

	@return: a `fxpackager.deploy.DeployResult`, or None for a dry run.
	@raises DeployDirNotConfiguredError: if output.deploy-dir is not set.
	"""
	plan = plan or planPackaging(settings, forDeploy=True, dryRun=dryRun)
	result = invoker.invoke(plan.descriptor, plan.engine, dryRun=dryRun)
	output = plan.config.output
	if dryRun:
		log.critical('*** Dry run: not deploying to %s', output.deployDir)
		return None
	return deploy.deploy(result.outputDir, output.deployDir, output.artifactBaseNameValue)
