from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="mailchimp-subscriber-count",
    version="1.0.0",
    author="Laurence Stephan",
    author_email="your.email@example.com",
    description="A Flask extension that displays a cached MailChimp list subscriber count",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/mailchimp-subscriber-count",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Communications :: Email :: Mailing List Servers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Framework :: Flask",
    ],
    python_requires=">=3.8",
    install_requires=[
        "Flask>=3.0.0",
        "python-dotenv>=1.0.0",
        "requests>=2.28.0",
        "cryptography>=41.0.0",
        "Babel>=2.12.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "freezegun>=1.2",
            "black>=22.0",
            "flake8>=5.0",
        ],
    },
    zip_safe=False,
)
