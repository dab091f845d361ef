from pathlib import Path

from setuptools import find_packages, setup

setup(
    name="setmap",
    version="0.1.0",
    description="Mapping keyed by unordered sets of elements.",
    long_description=Path("README.md").read_text(encoding="utf-8"),
    long_description_content_type="text/markdown",
    keywords="mapping set dictionary canonical key",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=Path("requirements.txt").read_text(encoding="utf-8").splitlines(),
    extras_require={"test": ["pytest", "hypothesis", "coverage"]},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    zip_safe=True,
    entry_points={"console_scripts": ["setmap=setmap.cli:app"]},
)
