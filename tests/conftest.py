"""
Root pytest configuration for hub-testkit.
"""

from hub_testkit.config.logging import bootstrap_logging

bootstrap_logging()
