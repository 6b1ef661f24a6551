from setuptools import setup, find_packages

setup(
    name='tksctl',
    version='0.1.0',
    packages=find_packages(),
    include_package_data=True,
    install_requires=[
        'typer[all]',
        'python-dotenv',
        'pyyaml',
        'grpcio',
        'protobuf>=4.22',
    ],
    extras_require={
        'test': [
            'pytest',
        ]
    },
    entry_points={
        'console_scripts': [
            'tksctl=tksctl.cli:app'
        ]
    },
    description='Command-line client for the TKS cluster lifecycle service',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.9',
)
