from setuptools import setup, find_packages

setup(
    name="subtake",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"subtake": ["data/fingerprints.json"]},
    install_requires=[
        "requests",
        "dnspython",
        "backoff",
        "tldextract",
        "python-whois>=0.9",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "subtake = subtake.cli:main",
        ],
    },
    description="Subdomain takeover scanner: CNAME triage and service fingerprinting",
    license="MIT",
    keywords="subdomain takeover cname dns recon security",
    python_requires=">=3.8",
)
