import setuptools

setuptools.setup(
    name='muck-tune',
    version='0.1',
    license='BSD-3-Clause',
    zip_safe=False,
    packages=setuptools.find_packages(include=['tune', 'tune.*']),
    fullname='MUCK Tunable Parameters',
    python_requires='>=3.8',
    install_requires=[
        'pyyaml',    'rich',
        'rapidfuzz', 'fastjsonschema'
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['tune=tune.main:main'],
    },
    description='Runtime-tunable parameter registry for a MUCK server: typed parameters, privilege gates, parm file persistence and introspection.',
)
