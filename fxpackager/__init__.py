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
Packages compiled JavaFX applications into a deployable bundle using the JavaFX Ant tasks, and copies the result to 
a deployment directory. 

The main entry points are `fxpackager.tasks.packageApplication` and `fxpackager.tasks.deployApplication`, or the 
command line (``python -m fxpackager --help``). 
"""
