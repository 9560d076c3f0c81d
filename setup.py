import re

from setuptools import find_packages, setup


with open("lineinput/__init__.py", "rb") as fh:
    init_text = fh.read().decode()
    VERSION = re.search(r"__version__ = \"(.*?)\"", init_text).group(1)

setup(
    name="lineinput",
    version=VERSION,
    packages=find_packages(
        exclude=["tests", "tests.*", "examples", "examples.*"]
    ),
    python_requires=">=3.6.0",
    install_requires=[],
    extras_require={
        "tests": ["pytest"],
    },
    license="MIT",
    description="An embeddable line editor that is fed one byte at a time.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    data_files=[("", ["LICENSE"])],
    zip_safe=True,
    entry_points={
        "console_scripts": [
            "lineinput = lineinput:cli",
        ],
    },
)
