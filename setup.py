
import setuptools


def readme():
    with open('README.md', 'r') as fh:
        return fh.read()

def license():
    with open('LICENSE', 'r') as f:
        return f.read()

setuptools.setup(
    name="chiprep",
    version="0.0.1",
    author="chiprep developers",
    description="ChIP-seq preprocessing: fastq to filtered BAM and bigWig",
    long_description=readme(),
    long_description_content_type="text/markdown",
    license=license(),
    keywords='ChIPseq bwa bigWig',
    packages=setuptools.find_packages(exclude=['test', 'test.*']),
    entry_points={
        'console_scripts': ['chiprep=chiprep.chiprep:main'],
    },
    install_requires=[
        'pandas',
        'PyYAML',
        'toml',
        'python-dateutil',
        'xopen',
        'Levenshtein',
    ],
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.6',
    include_package_data=True,
    zip_safe=False,
)
