from setuptools import find_packages, setup

setup(
    name='fakepower',
    version='0.1.0',
    description='Electrode currents by the fake power theorem, on a small 2d finite element toolkit',
    packages=find_packages(exclude=['examples', 'examples.*']),
    install_requires=[
        'numpy',
        'scipy>=1.9',
        'numpy-indexed',
        'matplotlib',
        'cached-property',
        'triangle',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['fakepower=fakepower.__main__:main'],
    },
    license='LGPL',
    platforms='any',
    zip_safe=False,
)
