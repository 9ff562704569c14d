from setuptools import setup, find_packages

setup(
    name='monkey-interpreter',
    version='0.1.0',
    description='Monkey language tree-walking interpreter',
    author='Monkey contributors',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    python_requires='>=3.8',
    install_requires=[
        'click>=7.0',
        'rich>=9.0'
    ],
    extras_require={
        'test': [
            'pytest>=7.0'
        ]
    },
    entry_points={
        'console_scripts': [
            'monkey = monkey.cli.main:cli'
        ]
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
)
