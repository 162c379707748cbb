class GenerationFailure(Exception):
    """
    Raised when a simulation turn cannot be produced: the text request failed
    or its response could not be parsed into a scene.
    """

    def __init__(self, message: str, kind: str = "call"):
        super().__init__(message)
        self.message = message
        self.kind = kind  # "call" or "parse"
