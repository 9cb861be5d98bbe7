LOGGER_NAME = "racesim"
