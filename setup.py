from setuptools import setup, find_packages

setup(
    name="genesys-cloud-mcp",
    version="0.1.0",
    description="Genesys Cloud Model Context Protocol (MCP) server for Claude Desktop and CLI",
    author="Claude User",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=[
        "fastmcp>=2.0.0",
        "httpx>=0.27.0",
        "pydantic>=2.0.0",
        "structlog>=24.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": ["genesys-mcp = genesys_mcp.server:main"],
    },
)
