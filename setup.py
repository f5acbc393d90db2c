import setuptools

with open("README.rst", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="stickynotes",
    version="0.1.0",
    description="Core state and persistence for a small collection of sticky notes.",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    packages=setuptools.find_packages('src'),
    package_dir={'': 'src'},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        'shortuuid',
    ],
    extras_require={
        'test': [
            'pytest',
            'pyfakefs',
        ],
    },
    python_requires='>=3.7',
)
