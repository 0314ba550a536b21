from setuptools import setup, find_packages

setup(
    name="DriveDocs",
    version="0.1.0",
    python_requires='>=3.8.0',
    packages=find_packages(exclude=("tests",)),
    install_requires=["google-api-python-client", "google-auth", "google-auth-oauthlib", "httplib2", "oauthlib",
                      "requests", "coredatamodules @ git+https://github.com/AfricasVoices/CoreDataModules"],
    extras_require={
        "test": ["pytest"]
    },
    entry_points={
        "console_scripts": ["drive-docs-upload=drive_docs.upload:main"]
    }
)
