import setuptools

with open("README.md", "r") as fh:
	long_description = fh.read()

with open('VERSION', 'r') as fh:
	VERSION = fh.read().strip()

setuptools.setup(
	name="kdeswitch",
	version=VERSION,
	description="Switch a Fedora image's KDE/Plasma stack between COPR and Rawhide and provision developer tooling",
	long_description=long_description,
	long_description_content_type="text/markdown",
	packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
	classifiers=[
		"Programming Language :: Python :: 3.12",
		"License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
		"Operating System :: POSIX :: Linux",
	],
	python_requires='>=3.11',
	install_requires=[
		'pydantic>=2.0',
		'typing_extensions>=4.4',
	],
	extras_require={
		'test': ['pytest'],
	},
	entry_points={
		'console_scripts': [
			'kdeswitch=kdeswitch:run_as_a_module',
		],
	},
)
