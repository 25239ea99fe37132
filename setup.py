from setuptools import setup, find_packages

from os import path
this_directory = path.abspath(path.dirname(__file__))
with open(path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='localeid',
    version='1.0.0',
    description='Parses, canonicalizes and negotiates locale identifiers.',
    long_description_content_type='text/markdown',
    long_description=long_description,
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={'localeid': ['data/*.json', 'logging.toml']},
    python_requires='>=3.10',
    install_requires=open('requirements.txt').readlines(),
    extras_require={'tests': ['pytest']},
    entry_points={'console_scripts': ['localeid=localeid.__main__:main']},
)
