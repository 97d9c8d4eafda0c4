from setuptools import setup, find_packages

setup(
    name='redmoon',
    version='0.1',
    zip_safe=False,
    packages=find_packages(),
    python_requires='>=3.7',
    install_requires=[
        'SQLAlchemy>=1.4',
        'construct>=2.10',
        'attrs>=19.1',
        'pypng>=0.0.20',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'redmoon = redmoon.main:setuptools_entry',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
    ]
)
