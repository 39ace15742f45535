from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup


ROOT = Path(__file__).resolve().parent


def read_text(path: Path, default: str = "") -> str:
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError:
        return default


def read_requirements(filename: str) -> list[str]:
    req_path = ROOT / filename
    if not req_path.exists():
        return []
    lines = read_text(req_path).splitlines()
    out: list[str] = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#") or line.startswith("-r"):
            continue
        out.append(line)
    return out


version = read_text(ROOT / "repy" / "VERSION", default="0.1.0")
test_requirements = read_requirements("requirements-dev.txt")

setup(
    name="repy",
    version=version,
    description="REPY – Technion timetable report parser (REPY -> JSON catalog)",
    long_description=read_text(ROOT / "README.md"),
    long_description_content_type="text/markdown",
    python_requires=">=3.8",
    packages=find_packages(exclude=("tests", "tests.*", ".github")),
    package_data={"repy": ["VERSION"]},
    install_requires=read_requirements("requirements.txt"),
    extras_require={"dev": test_requirements, "test": test_requirements},
    entry_points={"console_scripts": ["repy=repy.cli:main"]},
)
