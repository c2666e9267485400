import pathlib

import setuptools

here = pathlib.Path(__file__).parent.resolve()

long_description = (here / "README.md").read_text(encoding="utf-8")

setuptools.setup(
    name="airgap-vault",
    version="0.1.0",
    description="Offline decoder and signer for Ethereum transactions",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "ethereum-types>=0.2.1,<0.3",
        "pycryptodome>=3.22,<4",
        "coincurve>=20,<22",
        "pydantic>=2.8.0,<3",
        "PyYAML>=6.0.2,<7",
    ],
    extras_require={
        "test": [
            "pytest>=8,<9",
            "ethereum-rlp>=0.1.1,<0.2",
        ],
    },
    entry_points={
        "console_scripts": [
            "airgap-vault=airgap_vault.cli:main",
        ],
    },
)
