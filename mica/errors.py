
class MicaError(Exception):
    """ Base class for all mica errors"""
    pass

class MicaSyntaxError(MicaError):
    """ Raised when source text cannot be read into S-expressions"""

class MicaUnboundSymbol(MicaError):
    """ Raised when a symbol is evaluated before it is bound"""

class MicaNotAFunction(MicaError):
    """ Raised when the head of an application does not evaluate to a function"""

class MicaTypeError(MicaError):
    """ Raised when the types of arguments passed to a primitive are incorrect"""

class MicaArityError(MicaError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class MicaRecursionError(MicaError):
    """ Raised when reading or evaluation nests deeper than the configured limit"""

class MicaIOError(MicaError):
    """ Raised when a script file cannot be found or read"""

class MicaBootstrapError(MicaError):
    """ Raised when the bootstrap program fails while building a global environment"""
