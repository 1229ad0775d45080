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
Runs child processes, relaying their output to a `fxpackager.utils.outputhandler.ProcessOutputHandler`.
"""

import subprocess, os
from threading import Lock

from fxpackager.utils.outputhandler import ProcessOutputHandler
from fxpackager.internal import DEFAULT_PROCESS_ENCODING

import logging
log = logging.getLogger('process')

class __ProcessMonitor(object):
	def __init__(self):
		self._global_process_list = set()
		self._global_process_lock = Lock()

	def killall(self):
		with self._global_process_lock:
			log.info('Cleaning up %d remaining child processes: %s', len(self._global_process_list), self._global_process_list)
			for p in self._global_process_list:
				try:
					p.kill()
				except Exception as e:
					if p.poll() is None:
						log.warning('Failed to clean up child process %s: %s', p, e)
			if self._global_process_list:
				log.info('Done cleanup up child processes')
			self._global_process_list.clear()
	def add(self,process):
		with self._global_process_lock:
			self._global_process_list.add(process)
	def remove(self,process):
		with self._global_process_lock:
			try:
				self._global_process_list.remove(process)
			except KeyError:
				pass # already removed by killall()

# used by the main entry point to force cleanup of children after Ctrl+C
_processCleanupMonitor = __ProcessMonitor()

def _communicate(process):
	"""
	PRIVATE method - do not call

	Reads all output from the process. If this is interrupted (e.g. by Ctrl+C) the process stays registered with
	the cleanup monitor so that `__ProcessMonitor.killall` can terminate it.

	@return: (out, err) byte buffers
	"""
	_processCleanupMonitor.add(process)
	stdout, stderr = process.communicate()
	_processCleanupMonitor.remove(process)
	return stdout, stderr

def call(args, env=None, cwd=None, outputHandler=None, outputEncoding=None):
	"""
	Call a process with the specified args, logging stderr and stdout to the specified
	output handler which will throw an exception if the exit code or output
	of the process indicates an error.

	@param args: The command and arguments to invoke (a list, the first element of which is the executable).
		None items in this list will be ignored.

	@param outputHandler: a ProcessOutputHandler instance. If not specified, a default is created.

	@param env: Override the environment the process is started in (defaults to the parent environment).
		A value of None removes that variable.

	@param cwd: Change the working directory the process is started in (defaults to the parent cwd)

	@param outputEncoding: name of the character encoding the process generates. If not specified
		the encoding of this process's stdout is assumed.

	@return: the outputHandler
	"""
	processName = os.path.basename(args[0])

	args = [x for x in args if x is not None]

	environs = os.environ.copy()
	if env:
		for k in env:
			if env[k] is None:
				environs.pop(k, None)
			else:
				environs[k] = env[k]
	if not cwd: cwd = os.getcwd()

	log.info('Executing %s process: %s', processName, ' '.join(['"%s"'%s if ' ' in s else s for s in args]))
	if cwd != os.getcwd():
		log.info('%s working directory: %s', processName, cwd)
	if env:
		log.info('%s environment overrides: %s', processName, ', '.join(sorted(['%s=%s'%(k, env[k]) for k in env])))
	try:
		process = subprocess.Popen(args, env=environs, stdout=subprocess.PIPE, stderr=subprocess.PIPE, cwd=cwd)
	except Exception as e:
		raise EnvironmentError('Cannot start process "%s": %s'%(args[0], e))

	if not outputHandler:
		outputHandler = ProcessOutputHandler(processName)

	(out, err) = _communicate(process)

	if outputEncoding is None:
		outputEncoding = DEFAULT_PROCESS_ENCODING
	log.debug('%s outputEncoding assumed to be: %s', processName, outputEncoding)

	# be tolerant about unexpected chars, given how hard it is to predict what subprocesses will write
	out = str(out, outputEncoding, errors='replace')
	err = str(err, outputEncoding, errors='replace')

	hasfailed = True
	try:
		for l in out.splitlines():
			outputHandler.handleLine(l, False)
		for l in err.splitlines():
			outputHandler.handleLine(l, True)

		outputHandler.handleEnd(process.returncode) # will throw on error
		hasfailed = False
		return outputHandler
	finally:
		if hasfailed:
			log.debug('Arguments of failed process are: %s' % '\n   '.join(['"%s"'%s if ' ' in s else s for s in args]))
