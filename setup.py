from setuptools import setup, find_packages

setup(
    name="photostream-feed-service",
    version="1.0.0",
    description="Photo feed, likes and profiles for the PhotoStream app on AWS Lambda",
    author="PhotoStream Team",
    author_email="dev@photostream.app",
    packages=find_packages(include=["photostream", "photostream.*"], exclude=["photostream.tests*"]),
    install_requires=[
        "boto3>=1.34.0",
        "pynamodb>=6.0.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "moto[dynamodb,s3,ssm]>=5.0.0",
        ],
    },
    python_requires=">=3.11",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.12",
    ],
)
