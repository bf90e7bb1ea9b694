"""Environment propagation across runner steps.

Collects variable and PATH changes made while installing a runtime, strips
conflicting PATH entries, extracts toolchain variables from native
initializer scripts, and writes the result out once for later steps."""
from setup_ruby.environment.accumulator import EnvironmentAccumulator
from setup_ruby.environment.differ import diff_environment, diff_initializer_environment
from setup_ruby.environment.propagator import Propagator
from setup_ruby.environment.sanitizer import clean_path

__all__ = [
    "EnvironmentAccumulator",
    "Propagator",
    "clean_path",
    "diff_environment",
    "diff_initializer_environment",
]
