from setuptools import setup, find_namespace_packages

setup(
    name             = 'align2hints',
    version          = '1.0.0',
    description      = (
        'Generate AUGUSTUS CDSpart and intron hints from spaln, exonerate, '
        'GenomeThreader and scipio protein alignments.'
    ),
    long_description = open('README.md').read(),
    long_description_content_type = 'text/markdown',
    license          = 'Artistic-1.0',
    python_requires  = '>=3.7',
    packages         = find_namespace_packages(include=['lib']),
    py_modules       = ['align2hints', 'validate_hints'],
    entry_points     = {
        'console_scripts': [
            'align2hints    = align2hints:main',
            'validate_hints = validate_hints:main',
        ],
    },
    install_requires = [],   # standard library only
    extras_require   = {
        'dev': ['pytest>=7.0'],
    },
    classifiers = [
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
        'License :: OSI Approved :: Artistic License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.7',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Operating System :: OS Independent',
    ],
    keywords = (
        'bioinformatics AUGUSTUS hints spaln exonerate GenomeThreader gth '
        'scipio protein alignment gene prediction intron CDSpart'
    ),
)
