from setuptools import setup, find_packages

setup(
    name="jsonrpc_client",
    version="0.1.0",
    description="JSON-RPC 2.0 client with request batching, reply correlation and result caching",
    author="jsonrpc_client maintainers",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    install_requires=[
        "httpx>=0.24.0",
        "pyzmq>=24.0.0",
        "diskcache>=5.4.0",
        "PyYAML>=6.0",
        "opentelemetry-api>=1.14.0",
        "opentelemetry-sdk>=1.14.0",
        "opentelemetry-exporter-otlp>=1.14.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov",
            "black",
            "isort",
            "pylint",
        ],
    },
    python_requires=">=3.9",
)
