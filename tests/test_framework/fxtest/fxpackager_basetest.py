import os, sys, zipfile

from pysys.constants import *
from pysys.basetest import BaseTest
from pysys.utils.filegrep import filegrep

class FxPackagerBaseTest(BaseTest):
	def fxpackager(self, args=None, shouldFail=False, stdouterr='fxpackager', env=None, workingDir=None, defaultLogFile=False, **kwargs):
		"""
		Runs fxpackager (python -m fxpackager) with the specified arguments, writing the log file to
		<testoutput>/<stdouterr>.log.

		@param defaultLogFile: if True, fxpackager writes its log file to the default location under the project's
		output directory instead of the test output directory.

		@param shouldFail: by default, the test will abort if fxpackager fails.
		Set this to True if it is expected to fail in which case
		the test will abort if it succeeds, and this method will return
		the failure message.

		@returns the failure message string if shouldFail=True, otherwise nothing
		"""
		stdout,stderr=self.allocateUniqueStdOutErr(stdouterr)
		args = args or []
		root = os.path.normpath(self.project.FXPACKAGER_ROOT)
		try:
			try:
				environs = self.createEnvirons(env, command=sys.executable)
				environs['PYTHONPATH'] = os.pathsep.join([root]+[p for p in [environs.get('PYTHONPATH')] if p])
				environs['COVERAGE_FILE'] = '.coverage.%s'%stdouterr # use unique names to avoid overwriting

				newargs = ['-m', 'fxpackager']
				if not defaultLogFile:
					newargs += ['--logfile', os.path.join(self.output, stdout.replace('.out', '')+'.log')]
				args = newargs+args
				if getattr(self, 'pythonCoverage', False):
					self.log.info('Enabling Python code coverage')
					args = ['-m', 'coverage', 'run', '--source=%s'%os.path.join(root, 'fxpackager')]+args

				result = self.startProcess(sys.executable, args,
					environs=environs, workingDir=workingDir or self.output,
					stdout=stdout, stderr=stderr, displayName=('fxpackager %s'%' '.join(args[2:])).strip(),
					abortOnError=True, ignoreExitStatus=shouldFail, **kwargs)
				if shouldFail and result.exitStatus != 0: raise Exception('fxpackager failed as expected')
			finally:
				self.logFileContents(stdout, tail=True) or self.logFileContents(stderr, tail=True)

		except AssertionError as e:
			self.log.exception('Assertion error: ')
			raise
		except Exception as e:
			m = None
			try:
				m = filegrep(stdout, '(FXPACKAGER FAILED: .*)', returnMatch=True)
				if m: m = m.group(1)
			except Exception as e2:
				if shouldFail: raise e2 # this is fatal if we need the error message
				self.log.exception('Error handling block failed: ')
			if not m: self.log.warning('Caught exception running fxpackager: %s', e)
			m = m or '<unknown failure>'

			if shouldFail:
				self.log.info('fxpackager failed as expected; message is: %s', m)
				return m
			else:
				self.abort(BLOCKED, 'fxpackager %s failed unexpectedly: %s'%(stdouterr, m))
		else:
			if shouldFail:
				self.abort(FAILED, 'fxpackager %s was expected to fail but succeeded'%stdouterr)

		return None

	def writeFile(self, path, text):
		""" Writes a text file (relative to the output directory unless absolute), creating the parent directory if
		needed.
		"""
		path = os.path.join(self.output, path)
		self.mkdir(os.path.dirname(path))
		self.write_text(path, text)
		return path

	def createSdk(self, dir='javafx-sdk'):
		""" Creates a directory that looks enough like a JavaFX SDK for the settings to be valid.

		@returns the absolute path of the SDK directory
		"""
		sdk = os.path.join(self.output, dir)
		self.writeFile(sdk+'/lib/ant-javafx.jar', '')
		return sdk

	def createArchive(self, path, entries=None):
		""" Creates a zip/jar archive containing the specified name:content entries. """
		self.mkdir(os.path.dirname(os.path.join(self.output, path)))
		with zipfile.ZipFile(os.path.join(self.output, path), 'w') as z:
			for name, content in sorted((entries or {'META-INF/MANIFEST.MF':'Manifest-Version: 1.0\n'}).items()):
				z.writestr(name, content)
		return os.path.join(self.output, path)

	def createProject(self, name='demo', libraries=('lib/commons.jar',), settings=None):
		"""
		Creates a project directory containing compiled classes, some library archives and a fxpackager.properties
		file that uses the fake Ant engine.

		@param settings: extra settings to write to the properties file, as a dict.
		@returns the absolute path of the project directory
		"""
		project = os.path.join(self.output, name)
		self.writeFile(project+'/target/classes/demo/Main.class', 'not really a class file')
		for lib in libraries:
			self.createArchive(os.path.join(name, lib))

		props = {
			'sdk-dir': self.createSdk().replace('\\', '/'),
			'main-class': 'demo.Main',
			'project.version': '1.0',
			'build.classpath': ','.join(libraries),
			'ant.command': '"%s" "%s"'%(sys.executable.replace('\\', '/'), os.path.normpath(self.project.FAKE_ANT).replace('\\', '/')),
		}
		props.update(settings or {})
		self.writeFile(project+'/fxpackager.properties', ''.join('%s=%s\n'%(k, v) for k, v in props.items()))
		return project

	def loadSettings(self, overrides, settingsFile=None, environ=None):
		""" Creates a Settings object in this process, with no environment overrides unless specified. """
		from fxpackager.settings import Settings
		return Settings(settingsFile, environ=environ or {}, overrides=overrides, baseDir=self.output)
