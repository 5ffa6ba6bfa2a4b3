"""Pytest configuration and fixtures."""

import pytest

from nbenv.config import reset_config
from nbenv.host import ExecutionHost, reset_host


@pytest.fixture(autouse=True)
def reset_globals_after_test(monkeypatch):
    """Reset global config and host after each test."""
    monkeypatch.delenv("NBENV_MANIFEST_PATH", raising=False)
    yield
    reset_config()
    reset_host()


@pytest.fixture
def host():
    """A fresh execution host."""
    return ExecutionHost()


@pytest.fixture
def fake_markdown():
    """Markdown renderer that wraps text in a marker element."""
    return lambda text: f"<md>{text}</md>"


@pytest.fixture
def sample_notebook_data():
    """Sample notebook data for testing."""
    return {
        "cells": [
            {
                "cell_type": "markdown",
                "source": ["# Data Types\n", "\n", "Exploring the fundamentals."],
                "metadata": {},
            },
            {
                "cell_type": "code",
                "execution_count": 1,
                "source": ["import numpy as np\n", "import matplotlib.pyplot as plt"],
                "outputs": [],
                "metadata": {},
            },
            {
                "cell_type": "code",
                "execution_count": 2,
                "source": ["from scipy.stats import norm\n", "print(np.arange(3))"],
                "outputs": [
                    {
                        "name": "stdout",
                        "output_type": "stream",
                        "text": ["[0 1 2]\n"],
                    },
                    {
                        "data": {"text/plain": ["array([0, 1, 2])"]},
                        "execution_count": 2,
                        "metadata": {},
                        "output_type": "execute_result",
                    },
                ],
                "metadata": {},
            },
            {
                "cell_type": "raw",
                "source": ["import should_not_count"],
                "metadata": {},
            },
        ],
        "metadata": {
            "kernelspec": {
                "display_name": "Python 3",
                "language": "python",
                "name": "python3",
            }
        },
        "nbformat": 4,
        "nbformat_minor": 5,
    }
