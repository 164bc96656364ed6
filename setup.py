"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='polybind',
	version='0.1.0',
	packages=['polybind', ],
	entry_points={
		'console_scripts': ["polybind = polybind.cmdline:main"],
	},
	license='MIT',
	description='Call members of Python classes by name, with overload resolution by argument type',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.10",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Libraries",
		"Topic :: Software Development :: Interpreters",
		"Environment :: Console",
    ],
	python_requires='>=3.10',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
