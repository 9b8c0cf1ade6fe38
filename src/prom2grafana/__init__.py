"""
prom2grafana - convert Prometheus rule files into Grafana alert resources.
"""

__version__ = "0.1.0"
