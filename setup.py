import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="mvscam",
    version="0.3",
    description="Calibrated camera views for multi-view stereo reconstruction.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering"
    ],
    keywords='multi-view stereo camera calibration projection matrix photogrammetry',
    python_requires='>=3.6',
    install_requires=["numpy", "opencv-python>=4.5"],
    extras_require={"test": ["scipy>=1.4", "pytest"]},
)
