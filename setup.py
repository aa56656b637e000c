import setuptools

setuptools.setup(
	name='tjparse',
	version='0.1.0',
	packages=[
		'tjparse',
		'tjparse.grammar',
		'tjparse.model',
		'tjparse.scanning',
		'tjparse.support',
		'tjparse.syntax',
	],
	python_requires='>=3.9',
	description='A parser for TaskJuggler-style project files, with a grammar that grows as it reads',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"Operating System :: OS Independent",
		"Topic :: Software Development :: Compilers",
		"Topic :: Office/Business :: Scheduling",
		"Development Status :: 3 - Alpha",
	],
	entry_points={
		'console_scripts': ['tjparse=tjparse.__main__:main'],
	},
)
