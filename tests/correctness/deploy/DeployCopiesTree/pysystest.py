__pysys_title__   = r""" Deploy - recursive copy preserving modification times """
#                        ================================================================================
__pysys_purpose__ = r""" Existing files in the deploy directory are overwritten; other files there are left alone.
	"""

__pysys_authors__ = "fxp"
__pysys_created__ = "2019-03-13"

import os
import pysys
from pysys.constants import *
from fxtest.fxpackager_basetest import FxPackagerBaseTest

from fxpackager import deploy
from fxpackager.utils.buildexceptions import DeployFailure

FILES = ['app-1.0.jar', 'app-1.0.jnlp', 'lib/commons.jar', 'web/css/style.css']
MTIME = 1546300800 # 2019-01-01

class PySysTest(FxPackagerBaseTest):
	def execute(self):
		for i, f in enumerate(FILES):
			self.writeFile('packaged/'+f, 'content of %s'%f)
			os.utime(self.output+'/packaged/'+f, (MTIME+i, MTIME+i))

		self.writeFile('deployed/app-1.0/app-1.0.jar', 'old jar')
		self.writeFile('deployed/app-1.0/unrelated.txt', 'keep me')

		self.result = deploy.deploy(self.output+'/packaged', self.output+'/deployed', 'app-1.0')

		try:
			deploy.deploy(self.output+'/does-not-exist', self.output+'/deployed', 'missing')
		except DeployFailure as e:
			self.log.info('Got expected exception: %s', e)
			self.missingError = str(e)
		else:
			self.missingError = None

	def validate(self):
		dest = os.path.join(self.output, 'deployed', 'app-1.0')
		self.assertThat('result == expected', result=tuple(self.result), expected=(dest, len(FILES)))
		for i, f in enumerate(FILES):
			self.assertThat('content == expected', content=open(dest+'/'+f).read(), expected='content of %s'%f)
			self.assertThat('mtime == expected', mtime=int(os.path.getmtime(dest+'/'+f)), expected=MTIME+i)
		self.assertPathExists(dest+'/unrelated.txt')
		self.assertThat('missingError and "does not exist" in missingError', missingError=self.missingError)
		self.assertPathExists('deployed/missing', exists=False)
