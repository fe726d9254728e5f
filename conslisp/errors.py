class LispError(Exception):
    """ Base class for all conslisp driver errors"""
    pass

class LispInvalidSymbol(LispError):
    """ Raised when an environment is keyed by something that is not a symbol"""
    pass

class LispSyntaxError(LispError):
    """ Raised when a line cannot be read, e.g. unbalanced brackets"""

# Evaluation itself never raises: language-level failures come back as the
# #error, #nil and #f sentinels.
