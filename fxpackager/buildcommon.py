# fxpackager - JavaFX application packaging and deployment
#
# This module holds definitions that are used throughout fxpackager, and
# typically all names from this module will be imported.
#
# Copyright (c) 2019 The fxpackager authors
#
# Derived from xpybuild, Copyright (c) 2013 - 2017, 2019 Software AG, Darmstadt, Germany and/or its licensors
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
Contains constants used throughout fxpackager such as `fxpackager.buildcommon.IS_WINDOWS` and
`fxpackager.buildcommon.FXPACKAGER_VERSION`, and helpers for formatting file locations.
"""

import os, inspect
import platform

def __getFxpackagerVersion():
	with open(os.path.join(os.path.dirname(os.path.abspath(inspect.getfile(inspect.currentframe()))), "FXPACKAGER_VERSION")) as f:
		return f.read().strip()
FXPACKAGER_VERSION: str = __getFxpackagerVersion()
"""The current fxpackager version."""

IS_WINDOWS: bool = platform.system()=='Windows'
""" A boolean that specifies whether this is Windows or some other operating system. """

RUNTIME_LIBRARY_NAME = 'jfxrt.jar'
""" The JavaFX runtime library, which is bundled with the target Java runtime and so must never be packaged
with the application. """

ANT_JAVAFX_LIBRARY = 'lib/ant-javafx.jar'
""" Location of the JavaFX Ant tasks library, relative to the JavaFX SDK directory. """

def formatFileLocation(path, lineNumber):
	""" Format the specified file path and line number into a string that editors and IDEs can jump to.

	>>> formatFileLocation('fxpackager.properties', 3)
	'fxpackager.properties:3'
	>>> formatFileLocation('fxpackager.properties', None)
	'fxpackager.properties'
	"""
	if lineNumber: return '%s:%d'%(path, lineNumber)
	return '%s'%path
