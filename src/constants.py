import re

NAME = "myshell"
PROMPT = f"{NAME}> "

# Operators understood by the lexer, longest first where prefixes overlap
OPERATORS = ("&&", "||", ">>", ";", "|", "<", ">", "(", ")", "&")
REDIRECT_OPS = ("<", ">", ">>", "2>")
DIGITS_RX = re.compile(r"^[0-9]*")

# Statuses returned by execute() for abnormal outcomes
INTERRUPT_STATUS = 130
UNKNOWN_COMMAND_STATUS = 255
SUBSHELL_FAILURE_STATUS = 254

# Exit status of a child that could not launch its program
LAUNCH_FAILURE_STATUS = 127

WELCOME = f"welcome to {NAME}!"
FAREWELL = "goodbye!"
INTERRUPT_NOTICE = "Interrupted"
UNKNOWN_COMMAND_NOTICE = "Unknown command '{name}'"
NONZERO_NOTICE = "Exited with nonzero status {status}"
ERROR_NOTICE = "error: {message}"

LOG_LEVEL_ENV = "MYSHELL_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(process)d %(name)s %(levelname)s: %(message)s"

# Status recorded for a line that failed to parse
SYNTAX_ERROR_STATUS = 2
