# flatten - take any input type and turn it sensibly into a list of strings
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
Utility functions for normalizing path lists and other settings that may be given as a string or a list.
"""

import os
import re

def getStringList(stringOrListOfStrings) -> list:
	""" Return a list of strings, either identical to the input (if it's already a list), or with the input wrapped in
	a new sequence (if it's a string), or an empty sequence (if its None).

	>>> getStringList('abc')
	['abc']

	>>> getStringList(['abc', 'def'])
	['abc', 'def']

	>>> getStringList(('abc', 'def'))
	['abc', 'def']

	>>> getStringList(None)
	[]

	>>> getStringList(5)
	Traceback (most recent call last):
	...
	ValueError: The specified value must be a list of strings: "5"
	"""
	if stringOrListOfStrings is None:
		return []
	if isinstance(stringOrListOfStrings, tuple):
		stringOrListOfStrings = list(stringOrListOfStrings)

	if isinstance(stringOrListOfStrings, list):
		return stringOrListOfStrings
	elif isinstance(stringOrListOfStrings, str):
		return [stringOrListOfStrings]
	raise ValueError('The specified value must be a list of strings: "%s"'%(stringOrListOfStrings))

def splitPathList(value, separator=os.pathsep) -> list:
	""" Split a list of paths given as a single string, separated by commas or by the platform path separator
	(which can be overridden for testing). Empty items and surrounding whitespace are removed.

	>>> splitPathList('a.jar:b.jar, c.jar', separator=':')
	['a.jar', 'b.jar', 'c.jar']

	>>> splitPathList(' , ')
	[]

	>>> splitPathList(['x.jar', ' y.jar '])
	['x.jar', 'y.jar']

	>>> splitPathList(None)
	[]
	"""
	if not value: return []
	if isinstance(value, str):
		value = re.split('[,%s]'%re.escape(separator), value)
	return [v.strip() for v in getStringList(value) if v and v.strip()]
