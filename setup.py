from setuptools import setup, find_packages
import re

# Read version from gmail_manager/__init__.py
with open('gmail_manager/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='gmail-manager',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'google-api-python-client',
        'google-auth',
        'google-auth-httplib2',
        'google-auth-oauthlib',
        'httplib2',
        'python-dotenv',
        'click>=8.0',
        'PyYAML',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'gmail-manager=gmail_manager.cli.__main__:main',
        ],
    },
    author='CLI Developer',
    description='Gmail Manager - interactive CLI for reading, searching, labeling and archiving Gmail messages.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
