from setuptools import setup

setup(
    name='pyremap',
    version='0.1.0',
    description='Randomized genomic interval sets for co-localization enrichment tests',
    install_requires=['pandas', 'numpy'],
    extras_require={
        'test': ['pytest'],
        'progress': ['tqdm', 'rich'],
        'docs': ['sphinx', 'myst-parser', 'furo'],
    },
    packages=['pyremap'],
    python_requires='>=3.10',
    zip_safe=False
)
