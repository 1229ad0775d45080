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
The command line entry point, used by ``python -m fxpackager``.

Exit status is 0 on success, 2 for invalid command line arguments, 5 for packaging problems reported as a
`fxpackager.utils.buildexceptions.BuildException`, and 6 for unexpected internal errors.
"""

import sys, os, getopt, time, logging, logging.handlers, threading
from functools import reduce

from fxpackager.buildcommon import FXPACKAGER_VERSION
from fxpackager.settings import Settings
from fxpackager.utils.buildexceptions import BuildException, PackagingFailure
from fxpackager.utils.consoleformatter import getConsoleFormatter, getConsoleFormatterNames
from fxpackager.utils.fileutils import mkdir
from fxpackager.utils.process import _processCleanupMonitor
from fxpackager import config as configresolver
from fxpackager import descriptor as descriptorbuilder
from fxpackager import tasks

log = logging.getLogger('fxpackager')

DEFAULT_SETTINGS_FILE = 'fxpackager.properties'
LOG_FILE_NAME = 'fxpackager.log'

_TASK_PACKAGE = 'package'
_TASK_DEPLOY = 'deploy'
_TASK_LIST_SETTINGS = 'listSettings'
_TASK_INFO = 'info'

def main(args):
	""" Command line argument parser.
	"""

	try:
		usage = [
'',
'JavaFX application packager %s on Python %s.%s.%s'% (FXPACKAGER_VERSION, sys.version_info[0], sys.version_info[1], sys.version_info[2]),
'',
'python -m fxpackager [operation]? [options]* [setting=value]*',
'',
'Operations: ',
'      package                Package the application (the default)',
'      deploy                 Package the application, then copy it into',
'                             output.deploy-dir',
'      --settings             List all settings with their values and where',
'                             each value came from',
'      --info                 Print the output name, paths and classpath',
'                             without packaging anything',
'',
'Options:',
'   -s --settings-file <file> Read settings from this .properties file',
'                             (default is ./%s if it exists)'%DEFAULT_SETTINGS_FILE,
'   -n --dry-run              Write the Ant buildfile but do not run Ant',
'',
'   -l --log-level LEVEL      Set the log level to debug/info/critical',
'   -L --logfile <file>       Set the log file location (default is',
'                             <build.output-dir>/%s)'%LOG_FILE_NAME,
'   -F --format               Message output format.',
'                             Options:',
] + [
'                                - '+ h for h in getConsoleFormatterNames()
] + [
'',
'Settings can also be provided as FXPACKAGER_<NAME> environment variables,',
'e.g. FXPACKAGER_SDK_DIR. Command line values override environment ',
'variables, which override the settings file.',
]
		if reduce(max, list(map(len, usage))) > 80:
			raise Exception('Invalid usage string - all lines must be less than 80 characters')

		overrides = {}
		task = None
		settingsFile = None
		logLevel = None
		logFile = None
		dryRun = False
		format = 'default'

		opts, rest = getopt.gnu_getopt(args, "nh?s:l:L:F:",
			["help", "settings-file=", "log-level=", "logfile=", "format=", "dry-run", "settings", "info"])

		for o, a in opts: # option arguments
			o = o.strip('-')
			if o in ["?", "h", "help"]:
				print('\n'.join(usage))
				return 0
			elif o in ['s', 'settings-file']:
				settingsFile = os.path.abspath(a)
			elif o in ['l', 'log-level']:
				logLevel = getattr(logging, a.upper(), None)
				if not isinstance(logLevel, int):
					print('invalid log level "%s"'%a)
					return 2
			elif o in ['L', 'logfile']:
				logFile = a
			elif o in ['F', 'format']:
				format = None
				for h in getConsoleFormatterNames():
					if h.upper() == a.upper():
						format = h
				if not format:
					print('invalid format "%s"; valid formatters are: %s'%(a, ', '.join(getConsoleFormatterNames())))
					print('\n'.join(usage))
					return 2
			elif o in ['n', 'dry-run']:
				dryRun = True
			elif o in ['settings']:
				task = _TASK_LIST_SETTINGS
			elif o in ['info']:
				task = _TASK_INFO
			else:
				assert False, "unhandled option: '%s'" % o

		for o in rest: # non-option arguments (i.e. no -- prefix)
			arg = o.strip()
			if not arg: continue
			if '=' in arg:
				key, value = arg.split('=', 1)
				overrides[key.strip()] = value
			elif arg in [_TASK_PACKAGE, _TASK_DEPLOY]:
				if task in [_TASK_PACKAGE, _TASK_DEPLOY]:
					print('Only one operation can be specified')
					print("For help use --help")
					return 2
				if task is None: task = arg
			else:
				print('Unknown operation "%s"'%arg)
				print("For help use --help")
				return 2
		if task is None: task = _TASK_PACKAGE

	except getopt.error as msg:
		print(msg)
		print("For help use --help")
		return 2

	threading.current_thread().name = 'main'
	rootLogger = logging.getLogger()
	rootLogger.setLevel(logLevel or logging.INFO)

	# initialize logging to stdout - minimal output to avoid clutter, but indicate progress
	stdout = sys.stdout
	hdlr = getConsoleFormatter(format)(stdout)
	hdlr.setLevel(logLevel or logging.WARNING)
	rootLogger.addHandler(hdlr)
	handlers = [hdlr]

	try:
		if settingsFile is None and os.path.isfile(DEFAULT_SETTINGS_FILE):
			settingsFile = os.path.abspath(DEFAULT_SETTINGS_FILE)
		settings = Settings(settingsFile, overrides=overrides)

		if task == _TASK_LIST_SETTINGS:
			print('Settings%s:'%(' from %s'%settings.settingsFile if settings.settingsFile else ''), file=stdout)
			for name, value, source in settings.describe():
				print('   %-32s %-30s (%s)'%(name, value, source), file=stdout)
			return 0

		if task == _TASK_INFO:
			_printInfo(settings, stdout)
			return 0

		if not logFile:
			logFile = os.path.join(settings.getValue('build.output-dir'), LOG_FILE_NAME)
		logFile = os.path.abspath(logFile)

		# the log file is usually under the output directory, which must not be touched until the configuration is
		# valid, so buffer records until then
		memoryHandler = logging.handlers.MemoryHandler(capacity=100000, flushLevel=logging.CRITICAL+1, flushOnClose=False)
		memoryHandler.setLevel(logLevel or logging.INFO)
		rootLogger.addHandler(memoryHandler)
		handlers.append(memoryHandler)

		log.info('Using fxpackager %s from %s on Python %s.%s.%s', FXPACKAGER_VERSION, os.path.normpath(os.path.dirname(os.path.dirname(__file__))), sys.version_info[0], sys.version_info[1], sys.version_info[2])
		log.info('Settings file: %s', settings.settingsFile or '<none>')
		for name, value, source in settings.describe():
			if source != 'default': log.info('Setting %s=%s (%s)', name, value, source)

		plan = tasks.planPackaging(settings, forDeploy=(task == _TASK_DEPLOY), dryRun=dryRun)

		logdir = os.path.dirname(logFile)
		if logdir and not os.path.exists(logdir): mkdir(logdir)
		log.critical('*** Writing log to: %s', logFile)

		fileHandler = logging.FileHandler(logFile, mode='w', encoding='UTF-8')
		fileHandler.setFormatter(logging.Formatter('%(asctime)s %(relativeCreated)05d %(levelname)-8s [%(threadName)s %(thread)5d] %(name)-10s - %(message)s', None))
		fileHandler.setLevel(logLevel or logging.INFO)
		handlers.append(fileHandler)
		memoryHandler.setTarget(fileHandler)
		memoryHandler.flush()
		rootLogger.removeHandler(memoryHandler)
		rootLogger.addHandler(fileHandler)

		startTime = time.time()
		if task == _TASK_DEPLOY:
			result = tasks.deployApplication(settings, dryRun=dryRun, plan=plan)
			if result:
				log.critical('*** FXPACKAGER SUCCEEDED: deployed %d file(s) to %s in %0.1f seconds', result.filesCopied, result.deployedDir, time.time()-startTime)
			else:
				log.critical('*** FXPACKAGER SUCCEEDED: dry run completed')
		else:
			result = tasks.packageApplication(settings, dryRun=dryRun, plan=plan)
			log.critical('*** FXPACKAGER SUCCEEDED: %s %s in %0.1f seconds', 'packaged' if result.exitCode is not None else 'dry run wrote buildfile for',
				result.outputDir, time.time()-startTime)
		return 0

	except BuildException as e:
		if isinstance(e, PackagingFailure):
			log.info('Complete output from Ant (exit code %s):\n%s', e.exitCode, e.log)
		log.error('*** FXPACKAGER FAILED: %s', e.toMultiLineString(), extra=e.getLoggerExtraArgDict())
		return 5

	except KeyboardInterrupt:
		_processCleanupMonitor.killall()
		raise

	except Exception as e:
		log.exception('*** FXPACKAGER FAILED: ')
		return 6

	finally:
		for h in handlers:
			rootLogger.removeHandler(h)
			if isinstance(h, logging.FileHandler): h.close()

def _printInfo(settings, stdout):
	config = configresolver.resolve(settings)
	inputs = configresolver.resolveBuildInputs(settings, config)
	d = descriptorbuilder.build(config, inputs.classpath, inputs.classesDir, inputs.outputRootDir, inputs.baseDir)

	print('Project:             %s'%config.projectName, file=stdout)
	print('Artifact base name:  %s'%config.output.artifactBaseNameValue, file=stdout)
	print('Run main class:      %s'%configresolver.runMainClass(config), file=stdout)
	print('Output directory:    %s'%d.outputDir, file=stdout)
	print('Output jar:          %s'%d.outputJar, file=stdout)
	print('Library directory:   %s'%d.libraryDir, file=stdout)
	print('Ant buildfile:       %s'%d.buildFile, file=stdout)
	print('Deploy directory:    %s'%(config.output.deployDir or '<not configured>'), file=stdout)
	print('Classes directory:   %s'%inputs.classesDir, file=stdout)
	print('Classpath:', file=stdout)
	for c in inputs.classpath:
		print('   %s%s'%(c, '' if c in d.libraries else ' (not packaged)'), file=stdout)

def run():
	""" Entry point for the ``fxpackager`` console script. """
	sys.exit(main(sys.argv[1:]))
