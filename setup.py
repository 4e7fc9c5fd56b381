from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    readme = f.read()

setup(
    name="pynngrid",
    license="GPL v3",
    version="1.0.0",
    description="Nearest-neighbor search over 2D points partitioned into a uniform grid",
    long_description=readme,
    long_description_content_type="text/markdown",
    author="Mikolaj Kuranowski",
    keywords="nearest neighbor spatial grid",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    packages=find_packages(include=["pynngrid", "pynngrid.*"]),
    python_requires=">=3.8, <4",
    install_requires=["typing_extensions"],
    extras_require={"test": ["pytest"]},
    data_files=["README.md"],
)
