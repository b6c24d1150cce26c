# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os
import sys
import logging
# We need this import to get access to logging.handlers.
import logging.handlers

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {}")
    msg = msg.format(__name__)
    print(msg)

log_banner = None

# Prevent "Broken Pipe" messages when piping output e.g. to tee(1)
logging.raiseExceptions = False

# List with valid loglevels
valid_log_levels = [ "CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG" ]

REDACTED = "***REDACTED***"

# We need this to add variables to logging format.
class ContextFilter(logging.Filter):
    """ Add log banner to log records. """
    def filter(self, record):
        record.log_banner = log_banner
        return True

def get_syslog_handler(address="/dev/log", facility="LOCAL7"):
    """ Get syslog handler for unix socket or host:port address. """
    if ":" in address:
        host, port = address.rsplit(":", 1)
        address = (host, int(port))
    try:
        facility = logging.handlers.SysLogHandler.facility_names[facility.lower()]
    except KeyError:
        msg = _("Unknown syslog facility: {facility}")
        msg = msg.format(facility=facility)
        raise ValueError(msg)
    return logging.handlers.SysLogHandler(address=address, facility=facility)

def get_logger(log_name, level, syslog=False, syslog_address="/dev/log",
    facility="LOCAL7", logger=None, pid=None, banner=None, logfile=None,
    timestamps=None, color_logs=False, stderr_log=False):
    """ Get new logger instance or re-configure a given one """
    global log_banner
    unknown_loglevel = None

    # Make log name lowercase.
    log_name = log_name.lower()

    # Handle colored logs.
    log_formatter = logging.Formatter
    if color_logs:
        from colorlog import ColoredFormatter
        log_formatter = ColoredFormatter

    # Catch unknown loglevels
    if level not in valid_log_levels:
        unknown_loglevel = level
        level = "INFO"

    # Get PID if needed.
    if pid is True:
        pid = os.getpid()

    # Use given banner or set one.
    if banner is True:
        log_banner = log_name
    elif isinstance(banner, str):
        log_banner = banner
    else:
        log_banner = None

    if log_banner:
        # Add PID to banner if given.
        if pid and not syslog:
            log_banner = f"{log_banner}[{pid}]"

        # Add colon to banner.
        log_banner = f"{log_banner}:"

        # Logformat without date.
        LOG_FORMAT = '%(log_banner)s %(levelname)s: %(message)s'
        # Logformat with date.
        LOG_FORMAT_DATE = '%(asctime)s %(log_banner)s %(levelname)s: %(message)s'
    else:
        # Logformat without date.
        LOG_FORMAT = '%(levelname)s: %(message)s'
        # Logformat with date.
        LOG_FORMAT_DATE = '%(asctime)s %(levelname)s: %(message)s'

    # Add colors to log.
    if color_logs:
        LOG_FORMAT = '%(log_color)s' + LOG_FORMAT + '%(reset)s'
        LOG_FORMAT_DATE = '%(log_color)s' + LOG_FORMAT_DATE + '%(reset)s'

    # Add log formatters.
    log_format_date = log_formatter(LOG_FORMAT_DATE, datefmt='%Y-%m-%d %H:%M:%S')
    log_format_without_date = log_formatter(LOG_FORMAT)

    if timestamps is True:
        log_format = log_format_date
    elif timestamps is False:
        log_format = log_format_without_date
    else:
        log_format = None

    # Create new logger if there where no logger instance given to us.
    if not logger:
        logger = logging.getLogger(log_name)

    if logger.hasHandlers():
        logger.handlers.clear()
    for x in list(logger.filters):
        logger.removeFilter(x)

    # Add filter to add log_banner to format string of logging.
    logger.addFilter(ContextFilter())

    # Set loglevel.
    logger.setLevel(level)

    # Check if we should log to syslog.
    if syslog:
        # Syslog adds its own timestamps.
        if not log_format:
            log_format = log_format_without_date
        syslog_handler = get_syslog_handler(address=syslog_address,
                                            facility=facility)
        syslog_handler.setFormatter(log_format)
        logger.addHandler(syslog_handler)
    # Check if we should log to file.
    elif logfile:
        # Default log format should be with date.
        if not log_format:
            log_format = log_format_date
        # Create handler for logfile.
        file_handler = logging.handlers.WatchedFileHandler(logfile)
        # Set log format for handler.
        file_handler.setFormatter(log_format)
        # Enable logging to logfile.
        logger.addHandler(file_handler)
    elif stderr_log:
        # Default log format should be without date.
        if not log_format:
            log_format = log_format_without_date
        stderr_handler = logging.StreamHandler(stream=sys.stderr)
        stderr_handler.setFormatter(log_format)
        logger.addHandler(stderr_handler)
    else:
        # Not in debug mode and no log target configured: throw away log
        # messages.
        logger.addHandler(logging.NullHandler())

    # Do not pass messages to the root logger.
    logger.propagate = False

    if unknown_loglevel:
        msg = _("Changed unknown loglevel '{}' to loglevel 'INFO'.")
        msg = msg.format(unknown_loglevel)
        logger.error(msg)

    return logger

def setup_library_logging(level, handlers=None):
    """ Configure logging of the ldap3 library (-dN). """
    from ldap3.utils.log import OFF
    from ldap3.utils.log import BASIC
    from ldap3.utils.log import NETWORK
    from ldap3.utils.log import EXTENDED
    from ldap3.utils.log import set_library_log_detail_level
    from ldap3.utils.log import set_library_log_hide_sensitive_data
    detail_levels = {
                    0   : OFF,
                    1   : BASIC,
                    2   : NETWORK,
                    }
    try:
        detail_level = detail_levels[level]
    except KeyError:
        detail_level = EXTENDED
    # Never log passwords sent to the server.
    set_library_log_hide_sensitive_data(True)
    set_library_log_detail_level(detail_level)
    if detail_level == OFF:
        return
    ldap3_logger = logging.getLogger("ldap3")
    ldap3_logger.setLevel(logging.DEBUG)
    if ldap3_logger.hasHandlers():
        ldap3_logger.handlers.clear()
    for handler in handlers or []:
        ldap3_logger.addHandler(handler)
    ldap3_logger.propagate = False

def redact_command_line(command_line, sensitive_opts):
    """ Replace the values of sensitive options in command line. """
    redacted = []
    redact_next = False
    for x in command_line:
        if redact_next:
            redacted.append(REDACTED)
            redact_next = False
            continue
        if x in sensitive_opts:
            redact_next = True
        elif "=" in x and x.split("=", 1)[0] in sensitive_opts:
            x = f"{x.split('=', 1)[0]}={REDACTED}"
        redacted.append(x)
    return redacted
