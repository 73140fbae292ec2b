from setuptools import setup

DESCRIPTION = 'Reader and writer for the header of NPY binary array files.'

with open('README.md') as f:
    LONG_DESCRIPTION = f.read()

with open('npyheader/version.py') as f:
    VERSION = f.read().split('=')[1].strip().strip("'")

dependencies = [
    'asciitree',
    'donfig',
    'numpy>=1.17',
    'numcodecs>=0.6.4',
]

setup(
    name='npyheader',
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    version=VERSION,
    extras_require={
        'test': [
            'pytest',
        ],
    },
    python_requires='>=3.7, <4',
    install_requires=dependencies,
    package_dir={'': '.'},
    packages=['npyheader'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Operating System :: Unix',
        'Programming Language :: Python :: 3',
    ],
    license='MIT',
)
