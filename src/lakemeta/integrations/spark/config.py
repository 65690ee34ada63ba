"""
Spark configuration for the catalog bridge.

Centralizes the Spark session options used when the bridge owns the session.
"""

from typing import Dict, Optional


class SparkConfig:
    """Spark session configuration."""

    DEFAULT_MASTER = "local[2]"

    @classmethod
    def get_spark_conf(cls, app_name: str, master_url: Optional[str] = None) -> Dict[str, str]:
        """Get Spark configuration dictionary."""
        master = master_url or cls.DEFAULT_MASTER
        conf = {
            "spark.app.name": app_name,
            "spark.master": master,
            "spark.sql.catalogImplementation": "hive",
            "spark.sql.adaptive.enabled": "true",
            "spark.driver.memory": "1g",
            "spark.sql.shuffle.partitions": "10",
            "spark.ui.enabled": "false",
        }
        if master.startswith("local"):
            conf["spark.executor.instances"] = "1"
        return conf
