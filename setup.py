#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import os
import sys
from setuptools import setup
from setuptools import find_packages

package_directory = os.path.realpath(os.path.dirname(__file__))

def read_file(file_name):
    """ Read file content. """
    file_path = os.path.join(package_directory, file_name)
    try:
        with open(file_path) as fd:
            return fd.read()
    except (OSError, IOError) as e:
        sys.stderr.write("Error reading file: %s: %s\n" % (file_path, e))
    return ""

def get_version():
    """ Get version without importing the package. """
    init_file = read_file(os.path.join("ykdevice", "__init__.py"))
    for line in init_file.split("\n"):
        if not line.startswith("__version__"):
            continue
        return line.split("=")[1].strip().strip('"')
    return "0.0.0"


install_requires = [
                "ldap3>=2.4.1",
                "pyasn1>=0.4.8",
                "prettytable>=0.7.2",
                "colorlog>=4.1.0",
                "termcolor>=1.1.0",
            ]

extras_require = {
            'test': [
                    "pytest>=7.0",
                    "pytest-mock>=3.10",
                    ],
            }

entry_points = {
            'console_scripts': [
                'register-yubikey-otp-device = ykdevice.command:ykdevice_commands',
                ],
            }

classifiers = [
            "Programming Language :: Python :: 3",
            "Development Status :: 5 - Production/Stable",
            "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
            "Topic :: Security",
            "Topic :: System :: Systems Administration :: Authentication/Directory :: LDAP",
        ]


setup(
    name="yubikey-otp-device",
    version=get_version(),
    description="Manage the YubiKey OTP devices of directory server accounts.",
    license="GPLv3",
    author="the2nd",
    author_email="the2nd@otpme.org",
    keywords='OTP, YubiKey, LDAP, two factor authentication',

    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",

    classifiers=classifiers,
    entry_points=entry_points,
    extras_require=extras_require,
    install_requires=install_requires,
    zip_safe=False,
)
