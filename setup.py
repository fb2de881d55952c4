from setuptools import setup, find_packages

setup(
    name="assetsweep",
    version="0.1.0",
    packages=find_packages(),
    py_modules=["cli"],
    install_requires=[
        "boto3",
        "botocore",
        "requests",
    ],
    extras_require={
        "test": [
            "pytest",
            "moto[s3,secretsmanager]>=5",
        ],
    },
    entry_points={
        'console_scripts': [
            'assetsweep=cli:main',
        ],
    },
    author="ecaa",
    description="Scanner asset deletion handler and per-OS path registry",
    python_requires='>=3.8',
)
