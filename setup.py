from pathlib import Path

from setuptools import find_packages, setup

root = Path(__file__).parent
readme = root / "README.md"

setup(
    name="ngdesugar",
    version="0.1.0",
    description=(
        "Expand Angular structural directive micro-syntax into explicit "
        "ng-template markup and directive class skeletons."
    ),
    long_description=readme.read_text("utf-8") if readme.exists() else "",
    long_description_content_type="text/markdown",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={"ngdesugar.runtime": ["templates/*.html"]},
    include_package_data=True,
    install_requires=[
        "jinja2>=3.1",
        "rich>=13.0",
        "rich-click>=1.7",
        "starlette>=0.37",
        "uvicorn>=0.29",
    ],
    extras_require={
        "test": [
            "click>=8.1",
            "pytest>=8.0",
            "httpx>=0.27",
        ],
    },
    entry_points={
        "console_scripts": [
            "ngdesugar=ngdesugar.cli.main:main",
        ],
    },
    zip_safe=False,
)
