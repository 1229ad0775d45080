# fileutils - helper methods related to the file system
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
Helpers for creating, deleting and copying files and directories, and for reading ``.properties`` files.

Nothing in this module retries a failed filesystem operation; problems are reported to the caller straight away
since they almost always need the user to do something (e.g. close a file that is locked by another program).
"""

import shutil, os, os.path, platform
import stat, sys
import io
import errno


import logging
log = logging.getLogger('fileutils')

__isWindows = platform.system()=='Windows'

if __isWindows: # Workaround required for windows filesystem semantics having a race condition between writes from POSIX API (which Python uses) and win32 API (e.g. used by Java/Ant)
	import win32file
	class Win32FileWriter(io.RawIOBase):
		def __init__(self, dest, mode='w', encoding=None, errors=None, newline=None):
			super(Win32FileWriter, self).__init__()
			assert 'w' in mode, 'Currently the Win32FileWriter class only supports writing, not reading'
			self.dest = dest
			self.__textWrapper = None if 'b' in mode else io.TextIOWrapper(self, encoding=encoding, errors=errors, newline=newline)
			self.__alreadyclosed = False

		def __enter__(self):
			self.Fd = win32file.CreateFile(self.dest, win32file.GENERIC_WRITE,
				win32file.FILE_SHARE_READ | win32file.FILE_SHARE_WRITE  | win32file.FILE_SHARE_DELETE,
				None, win32file.CREATE_ALWAYS, win32file.FILE_ATTRIBUTE_NORMAL, None)

			if self.__textWrapper is not None: return self.__textWrapper
			return self

		def writable(self): return True
		def write(self, data):
			err, byteswritten = win32file.WriteFile(self.Fd, data)
			return byteswritten

		def close(self):
			if self.__alreadyclosed: return # idempotent, since the text wrapper also tries to close us
			self.__alreadyclosed = True

			if self.__textWrapper is not None: self.__textWrapper.close()
			win32file.CloseHandle(self.Fd)

		def __exit__(self, ex_type, ex_val, tb):
			self.close()

openForWrite = Win32FileWriter if __isWindows else open
"""
Open file for writing and return a corresponding text or binary stream file object.

This has the same semantics as open/io.open, but should be used instead of open/io.open
for any file that will be read by a Java process such as Ant, to avoid file system race conditions on Windows.
This class must be used from a `with` clause.
"""

def mkdir(newdir):
	""" Recursively create the specified directory if it doesn't already exist.

	If it does, exit without error.

	@param newdir: The path to create.
	@return: newdir, to allow fluent use of this method.
	"""
	origdir = newdir
	newdir=normLongPath(newdir)
	if os.path.isdir(newdir): # already exists
		return origdir

	if os.path.isfile(newdir):
		raise IOError("A file with the same name as the desired dir, '%s', already exists" % newdir)

	try:
		os.makedirs(newdir)
	except Exception as e:
		if not os.path.isdir(newdir):
			raise IOError('Problem creating directory %s: %s' % (newdir, e))
	return origdir

def deleteDir(path):
	""" Recursively delete a directory and its contents.

	Read-only files are made writable before deletion. Does nothing if the directory doesn't exist.

	@param path: the path to delete.
	@raises OSError: if the directory (or something inside it) could not be deleted, for example because
		a file is locked by another process.
	"""

	def handleRemoveReadonly(func, path, exc):
		excvalue = exc[1] if isinstance(exc, tuple) else exc # onerror passes exc_info, onexc passes the exception
		log.info("handleRemoveReadonly: error removing path %s (%s %s); exists=%s", path, errno.errorcode.get(getattr(excvalue, 'errno', None), "EUNKNOWN"), func.__name__, os.path.exists(path))

		if func in (os.rmdir, os.remove, os.unlink) and getattr(excvalue, 'errno', None) == errno.EACCES:
			# access denied, make it writable first
			os.chmod(path, stat.S_IRWXU| stat.S_IRWXG| stat.S_IRWXO) # 0777
			func(path)
			log.info("handleRemoveReadonly: fixed by chmod: %s", path)
			return
		raise excvalue

	path = normLongPath(path)
	if not os.path.exists(path):
		return
	if os.path.isfile(path):
		raise OSError("Unable to delete dir %s as this is a file not a directory" % (path))

	try:
		if sys.version_info >= (3, 12):
			shutil.rmtree(path, ignore_errors=False, onexc=handleRemoveReadonly)
		else:
			shutil.rmtree(path, ignore_errors=False, onerror=handleRemoveReadonly)
	except OSError as e:
		if os.path.exists(path):
			raise OSError("Unable to delete dir %s: %s" % (path, e))

def copyFile(src, dest):
	""" Copy a single file, creating the parent directory if needed, and preserving the modification time and
	permission bits of the source.

	@return: dest
	"""
	mkdir(os.path.dirname(dest))
	with open(src, 'rb') as inp:
		with openForWrite(dest, 'wb') as out:
			shutil.copyfileobj(inp, out)
	shutil.copystat(src, dest)
	return dest

def copyTree(src, dest):
	""" Recursively copy the contents of the src directory into dest, overwriting any files already present in
	dest and preserving modification times. Directories are created as needed; files already in dest that
	are not in src are left alone.

	@return: the number of files copied.
	"""
	src = normLongPath(src)
	dest = normLongPath(dest)
	copied = 0
	mkdir(dest)
	for dirpath, dirnames, filenames in os.walk(src):
		dirnames.sort() # deterministic order helps when reading the log
		destdir = os.path.join(dest, os.path.relpath(dirpath, src))
		mkdir(destdir)
		for f in sorted(filenames):
			copyFile(os.path.join(dirpath, f), os.path.join(destdir, f))
			copied += 1
		shutil.copystat(dirpath, destdir)
	# directory times change as their contents are written, so fix them up once everything is in place
	for dirpath, dirnames, filenames in os.walk(src, topdown=False):
		shutil.copystat(dirpath, os.path.join(dest, os.path.relpath(dirpath, src)))
	return copied

def parsePropertiesFile(lines):
	"""
	Parse the contents of the specified properties file or line list, and return an ordered list
	of (key,value,lineno) pairs.

	@param lines: an open file handle or a sequence that can be iterated over to get each line in the file.

	>>> parsePropertiesFile(['a','b=c',' z  =  x', 'a=d #foo', '#g=h'])
	[('b', 'c', 2), ('z', 'x', 3), ('a', 'd', 4)]
	>>> parsePropertiesFile(['sdk-dir=C:\\\\\\\\javafx-sdk'])
	[('sdk-dir', 'C:\\\\javafx-sdk', 1)]
	"""
	result = []

	lineNo = 0

	for line in lines:
		lineNo += 1

		if '#' in line:
			line = line[:line.find('#')].strip()
		line = line.strip()
		if not line or line.startswith('#') or line.startswith('//') or not '=' in line:
			continue

		key = line[:line.find('=')].strip()
		value = line[line.find('=')+1:].strip()

		# NB: we don't have a full implementation of .properties escaping (e.g. \n but not \\n etc)
		value = value.replace('\\\\','\\')

		result.append((key,value, lineNo))
	return result

if os.sep == '\\':
	def isDirPath(path):
		""" Returns true if the path is a directory (ends with / or \\).

		>>> isDirPath(None)
		False

		>>> isDirPath('a/')
		True
		"""
		try:
			return path[-1] in {'/', '\\'}
		except Exception:
			return False
else:
	def isDirPath(path):
		""" Returns true if the path is a directory (ends with / or \\).

		>>> isDirPath(None)
		False

		>>> isDirPath('a/')
		True

		>>> isDirPath('a')
		False
		"""
		try:
			return path[-1] == '/'
		except Exception:
			return False

def normLongPath(path):
	"""
	Normalizes and absolutizes a path (os.path.abspath), and on
	windows adds the "\\\\?\\" prefix needed to force correct handling of long
	(>256 chars) paths.

	@param path: the path to be converted.
	"""
	if not path: return path

	if __isWindows and len(path)>2 and path[1] == ':' and path[0] >= 'A' and path[0] <= 'Z':
		path = path[0].lower()+path[1:]

	if __isWindows and path.startswith('\\\\?\\'):
		return path.replace('/', '\\')

	path = os.path.abspath(path)+(os.path.sep if isDirPath(path) else '')
	if __isWindows and len(path) > 255:
		if path.startswith('\\\\'):
			path = '\\\\?\\UNC\\'+path.lstrip('\\') # \\?\UNC\server\share
		else:
			path = '\\\\?\\'+path
	return path
