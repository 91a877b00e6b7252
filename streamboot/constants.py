# streamboot/constants.py
"""Well-known configuration keys shared by the loader, reconciler and runtime."""

# Required / optional keys read from the job's own configuration
MAIN_CLASS_KEY = 'spark.app.main'
APP_NAME_KEY = 'spark.app.name'
CONF_VERSION_KEY = 'spark.app.conf.version'
COORDINATION_ENDPOINT_KEY = 'spark.monitor.zookeeper'

# Audit keys written into the resolved configuration
LOCAL_VERSION_KEY = 'spark.app.conf.local.version'
CLOUD_VERSION_KEY = 'spark.app.conf.cloud.version'
WINNING_SOURCE_KEY = 'spark.app.conf.winner'
EFFECTIVE_VERSION_KEY = 'spark.app.conf.effective.version'
IDENTITY_KEY = 'spark.app.myid'
USER_ARGS_KEY = 'spark.app.user.args'
CONF_SOURCE_KEY = 'spark.app.conf.source'
DEBUG_KEY = 'spark.app.debug'

# Runtime topology
MASTER_KEY = 'spark.master'

DEBUG_APP_NAME_PREFIX = '[LocalDebug] '
