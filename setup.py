from setuptools import find_packages, setup

if __name__ == "__main__":
    setup(
        name="picosiwe",
        version="0.1.0",
        description="Sign-In with Ethereum (EIP-4361) message parsing and verification",
        packages=find_packages(where="src"),
        package_dir={"": "src"},
        python_requires=">=3.9",
        install_requires=[
            "coincurve>=18",
            "eth-hash[pycryptodome]>=0.5",
        ],
        extras_require={
            "test": ["pytest>=7", "hypothesis>=6"],
        },
    )
