# setup.py

from setuptools import setup, find_packages

setup(
    name="proxmox-pvenom",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "requests",
        "urllib3",
        "rich",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'pvenom=pvenom.cli:main',
        ],
    },
    description="Read-only Proxmox VE cluster observability CLI",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords="proxmox virtualization monitoring lxc qemu",
    python_requires=">=3.8",
)
