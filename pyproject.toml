[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iiwactl"
version = "0.1.0"
description = "Joint-space impedance and admittance controllers, external torque sensing, low-pass filtering, a Levenberg-Marquardt solver and joystick servo mapping for 7-axis robot arms"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "robotics",
    "impedance-control",
    "admittance-control",
    "low-pass-filter",
    "levenberg-marquardt",
    "teleoperation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["iiwactl"]

[tool.pytest.ini_options]
addopts = "-ra"
