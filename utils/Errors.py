

class BaseError(Exception):
    def __init__(self, msg):
        super().__init__(msg)
        self.msg = msg

class ProtocolError(BaseError):
    pass

class ScriptError(BaseError):
    pass

class ScriptStateError(BaseError):
    pass

# Raised when a caller asks for connected data without checking the outpoint
# is connected first.
class NotConnectedError(BaseError, RuntimeError):
    pass
