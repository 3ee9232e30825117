[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "klinebacktest"
version = "0.1.0"
description = "K-line market data with backtesting results, moving averages and chart geometry"
requires-python = ">=3.10"
dependencies = []
keywords = ["kline", "candlestick", "backtesting", "futures", "moving-average", "chart"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Financial and Insurance Industry",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["klinebacktest"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
