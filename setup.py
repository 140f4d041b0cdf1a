from setuptools import find_packages, setup

with open("fritzbox/version.py") as f:
    exec(f.read())

setup(
    name="python-fritzbox",
    version=__version__,  # type: ignore # noqa: F821
    description="Python API for the AVM FRITZ!Box home automation interface",
    url="https://github.com/python-fritzbox/python-fritzbox",
    author="",
    author_email="",
    license="MIT",
    packages=find_packages(include=["fritzbox", "fritzbox.*"]),
    install_requires=[
        "aiohttp>=3",
        "yarl",
        "mashumaro>=3.11",
        "asyncclick>=8.1.7",
    ],
    extras_require={
        "speedups": ["orjson>=3.9.1"],
        "test": [
            "pytest",
            "pytest-asyncio",
            "pytest-mock",
            "pytest-freezer",
            "freezegun",
        ],
    },
    python_requires=">=3.11",
    entry_points={"console_scripts": ["fritzbox=fritzbox.cli.main:cli"]},
    zip_safe=False,
)
