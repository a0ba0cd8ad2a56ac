import os
from setuptools import setup, find_packages

def parse_requirements(requirements):
    with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), requirements)) as f:
        return [l.strip('\n') for l in f if l.strip('\n') and not l.startswith('#')]

requirements = parse_requirements("requirements.txt")

setup(
    name='coursehub-backend',
    version='0.1.0',
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.4",
            "httpx>=0.24",
        ],
    },
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={
        "coursehub_backend": [
            "alembic.ini",
            "alembic/*.py",
            "alembic/*.mako",
            "alembic/versions/*.py",
        ],
    },
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "coursehub=coursehub_backend.cli.cli:cli",
        ],
    }
)
