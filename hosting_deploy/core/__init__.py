# Core - configuration, errors, logging and workflow commands
