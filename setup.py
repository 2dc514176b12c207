"""Setup tilegrid."""

from setuptools import find_packages, setup

with open("README.md") as f:
    long_description = f.read()

inst_reqs = [
    "attrs",
    "fastapi>=0.100.0",
    "pydantic~=2.0",
    "pydantic-settings~=2.0",
    "pyproj>=3.1,<4.0",
]
extra_reqs = {
    "test": ["pytest", "pytest-cov", "httpx"],
}


setup(
    name="tilegrid",
    version="0.1.0",
    description="OGC TileMatrixSet grids: tile math, tile enumeration and tile indexes.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    classifiers=[
        "Intended Audience :: Information Technology",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: GIS",
    ],
    keywords="TileMatrixSet OGC Tiles Quadkey Hilbert FastAPI",
    license="MIT",
    packages=find_packages(exclude=["tests*"]),
    package_data={"tilegrid": ["data/*.json"]},
    include_package_data=True,
    zip_safe=False,
    install_requires=inst_reqs,
    extras_require=extra_reqs,
)
