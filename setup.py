import setuptools

import rangetree

setuptools.setup(
    name="rangetree",
    version=rangetree.__version__,
    author="rangetree developers",
    description="Segment trees with point and lazy range updates",
    packages=setuptools.find_packages(exclude=("test",)),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.7",
    install_requires=[
        "click",
        "sortedcontainers",
    ],
    entry_points={
        "console_scripts": [
            "rangetree=rangetree.cli:main",
        ],
    },
)
