[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rmtoolkit"
version = "0.1.0"
description = "Robot controller toolkit: fixed-size packet links over UDP and serial, projectile aiming solvers, an extended Kalman filter and vision geometry helpers"
requires-python = ">=3.10"
keywords = ["robotics", "serial", "udp", "packet", "projectile", "gimbal", "kalman-filter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "pyserial",
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rmtoolkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
