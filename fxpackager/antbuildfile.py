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
Serializes a `fxpackager.descriptor.Descriptor` as an Ant buildfile that uses the JavaFX Ant tasks from
``ant-javafx.jar``. The buildfile has a single target called ``default``.
"""

import os
import logging

from xml.etree import ElementTree as ET
from xml.dom import minidom

from fxpackager.descriptor import ApplicationInstruction, ResourcesInstruction, JarInstruction, SignJarInstruction, DeployInstruction
from fxpackager.utils.fileutils import mkdir, openForWrite

log = logging.getLogger('antbuildfile')

FX_NAMESPACE = 'javafx:com.sun.javafx.tools.ant'
FX_ANTLIB_RESOURCE = 'com/sun/javafx/tools/ant/antlib.xml'
TARGET_NAME = 'default'

ET.register_namespace('fx', FX_NAMESPACE)

_addXmlNode = ET.SubElement

def _fx(tag):
	return '{%s}%s'%(FX_NAMESPACE, tag)

def _bool(value):
	return 'true' if value else 'false'

def _addApplication(parent, i):
	_addXmlNode(parent, _fx('application'), id=i.id, name=i.name, mainClass=i.mainClass)

def _addResources(parent, i):
	node = _addXmlNode(parent, _fx('resources'), id=i.id)
	# libraryDir holds only the staged archives, so no includes pattern is needed
	if i.libraries:
		_addXmlNode(node, _fx('fileset'), dir=i.libraryDir)

def _addJar(parent, i):
	node = _addXmlNode(parent, _fx('jar'), destfile=i.destFile)
	_addXmlNode(node, _fx('application'), refid=i.applicationRef)
	_addXmlNode(node, 'fileset', dir=i.classesDir)
	_addXmlNode(node, _fx('resources'), refid=i.resourcesRef)

def _addSignJar(parent, i):
	node = _addXmlNode(parent, _fx('signjar'), destdir=i.dir, keyStore=i.keyStore, storePass=i.storePass,
		alias=i.alias, keyPass=i.keyPass, storeType=i.storeType)
	_addXmlNode(node, 'fileset', dir=i.dir)

def _addDeploy(parent, i):
	node = _addXmlNode(parent, _fx('deploy'), width=str(i.width), height=str(i.height),
		embeddedWidth=i.embeddedWidth, embeddedHeight=i.embeddedHeight,
		outdir=i.outDir, outfile=i.outFile, placeholderId=i.placeholderId)
	_addXmlNode(node, _fx('application'), refid=i.applicationRef)
	resources = _addXmlNode(node, _fx('resources'))
	jar = _addXmlNode(resources, _fx('fileset'), dir=os.path.dirname(i.jarFile))
	_addXmlNode(jar, 'include', name=os.path.basename(i.jarFile))
	if i.libraries:
		_addXmlNode(resources, _fx('fileset'), dir=i.libraryDir)
	_addXmlNode(node, _fx('permissions'), elevated=_bool(i.permissions.elevated), cacheCertificates=_bool(i.permissions.cacheCertificates))
	if i.template is not None:
		_addXmlNode(node, _fx('template'), file=i.template.file, tofile=i.template.toFile)

_writers = {
	ApplicationInstruction: _addApplication,
	ResourcesInstruction: _addResources,
	JarInstruction: _addJar,
	SignJarInstruction: _addSignJar,
	DeployInstruction: _addDeploy,
}

def serialize(descriptor):
	"""
	Create the Ant buildfile for the specified descriptor.

	The same descriptor always produces exactly the same bytes.

	@return: the UTF-8 encoded buildfile, as bytes.
	"""
	rootNode = ET.Element('project', name=descriptor.projectName, default=TARGET_NAME, basedir='.')
	targetNode = _addXmlNode(rootNode, 'target', name=TARGET_NAME)
	_addXmlNode(targetNode, 'taskdef', resource=FX_ANTLIB_RESOURCE, uri=FX_NAMESPACE, classpath=descriptor.antLibrary)

	for instruction in descriptor.instructions():
		_writers[type(instruction)](targetNode, instruction)

	# Use minidom to reformat the XML since ElementTree doesn't do it for us.
	return minidom.parseString(ET.tostring(rootNode)).toprettyxml('\t', '\n', encoding='utf-8')

def write(descriptor):
	"""
	Serialize the descriptor and write it to its buildfile location, replacing any existing file.

	@return: the path of the buildfile.
	"""
	path = descriptor.buildFile
	mkdir(os.path.dirname(path))
	with openForWrite(path, 'wb') as f:
		f.write(serialize(descriptor))
	log.info('Wrote Ant buildfile: %s', path)
	return path
