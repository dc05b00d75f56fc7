"""CodeProbe: line-oriented structural analysis for Java and friends."""

__version__ = "1.2.0"
