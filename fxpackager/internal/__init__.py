# fxpackager - JavaFX application packaging and deployment
#
# Copyright (c) 2019 The fxpackager authors
#
# Derived from xpybuild, Copyright (c) 2019 Software AG, Darmstadt, Germany and/or its licensors
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
Internal implementation modules which are not part of the public API.
"""

import locale, sys

DEFAULT_PROCESS_ENCODING = getattr(sys.stdout, 'encoding', None) or locale.getpreferredencoding()
""" The encoding assumed for the output of child processes; the same one this process is using
(stdout encoding will be None unless in a terminal). """
