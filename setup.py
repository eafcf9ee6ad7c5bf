from setuptools import setup, find_packages

setup(
    name="vibe_post",
    version="1.0.0",
    packages=find_packages(include=["vibe_post", "vibe_post.*"]),
    install_requires=[
        "aiohttp>=3.8.1",
        "cryptography>=3.4.7",
        "fastapi>=0.100.0",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "python-dotenv>=0.19.0",
        "uvicorn>=0.15.0",
    ],
    extras_require={
        "test": [
            "httpx>=0.24.0",
            "pytest>=7.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    python_requires=">=3.9",
    description="Turns GitHub activity into social media post drafts",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: FastAPI",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
