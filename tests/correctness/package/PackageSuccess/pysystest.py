__pysys_title__   = r""" Package - end to end packaging with the Ant engine """
#                        ================================================================================
__pysys_purpose__ = r""" Uses a stand-in for Ant that writes the files the JavaFX tasks would. """

__pysys_authors__ = "fxp"
__pysys_created__ = "2019-03-11"

import os, zipfile
import pysys
from pysys.constants import *
from fxtest.fxpackager_basetest import FxPackagerBaseTest

class PySysTest(FxPackagerBaseTest):
	def execute(self):
		project = self.createProject(settings={'java.home':'../jdk', 'template.file':'web/index.html'})
		self.writeFile(project+'/web/index.html', '<html><body>#DT.SCRIPT.CODE#<div id="javafx"></div></body></html>')

		# leftovers from a previous build must not survive
		self.writeFile(project+'/target/demo-1.0/stale.txt', 'old')
		self.writeFile(project+'/target/lib/old.jar', 'old')

		self.fxpackager(['package'], workingDir=project)

	def validate(self):
		out = self.output+'/demo/target/demo-1.0'
		self.assertThat('jarEntries == expected', jarEntries=zipfile.ZipFile(out+'/demo-1.0.jar').namelist(), expected=['demo/Main.class'])
		self.assertPathExists(out+'/demo-1.0.jnlp')
		self.assertPathExists(out+'/demo-1.0.html')
		self.assertPathExists(out+'/lib/commons.jar')
		self.assertPathExists(out+'/stale.txt', exists=False)
		self.assertThat('staged == ["commons.jar"]', staged=os.listdir(self.output+'/demo/target/lib'))
		self.assertGrep(out+'/web/index.html', expr='<script>deploy\("demo-1.0"\)</script>')
		self.assertGrep(out+'/demo-1.0.jnlp', expr='width="800" height="600"')

		self.assertGrep('fxpackager.out', expr=r'^\*\*\* Packaging demo to ')
		self.assertGrep('fxpackager.out', expr=r'^\*\*\* FXPACKAGER SUCCEEDED: packaged .*demo-1.0')
		self.assertGrep('fxpackager.out', expr=r'\[ERROR\]', contains=False)
		self.assertGrep('fxpackager.out', expr=r'\[WARNING\] .*Warning: no icons configured')

		self.assertGrep('fxpackager.log', expr=r'processoutput - ant> BUILD SUCCESSFUL')
		self.assertGrep('fxpackager.log', expr=r'JAVA_HOME=.*jdk$')
		self.assertGrep('fxpackager.log', expr=r'Arguments: -noinput -buildfile .*build.xml default')
