import yaml
import os
import logging

from model.model_errors import ConfigError

# Some static globals
MAX_HEX_LENGTH = 1000
MAX_HEXDUMP_SIZE = 256

CONFIG_FILE = os.path.join(os.path.dirname(__file__), "config.yaml")

DEFAULTS = {
    "logLevel": "WARNING",
    "logFile": None,
    "strictOffset": False,
    "hexdump": True,
}


class Config(object):
    def __init__(self, configPath=CONFIG_FILE):
        self.configPath = configPath
        self.data = dict(DEFAULTS)

    def getConfigPath(self):
        return self.configPath

    def getConfig(self):
        return self.data

    def load(self):
        self.data = dict(DEFAULTS)
        if not os.path.exists(self.configPath):
            logging.debug("No config file at {}, using defaults".format(self.configPath))
            return

        with open(self.configPath) as yamlfile:
            try:
                loaded = yaml.safe_load(yamlfile)
            except yaml.YAMLError as e:
                raise ConfigError('Decoding {} failed with: {}'.format(self.configPath, e)) from e

        if loaded is None:  # empty file
            return
        if not isinstance(loaded, dict):
            raise ConfigError('{} does not contain a mapping'.format(self.configPath))
        self.data.update(loaded)

    def get(self, value):
        return self.data.get(value, DEFAULTS.get(value))

config = Config()
