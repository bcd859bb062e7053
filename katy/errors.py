class KatyError(Exception):
    """
    Base class for every error raised by katy.
    """


class PodNotPresent(KatyError):
    def __init__(self, namespace: str, name: str):
        super().__init__(f"Pod not present: {namespace}/{name}")
        self.namespace = namespace
        self.name = name


class TransportError(KatyError):
    """
    The cluster could not be reached, refused the request or
    returned something that could not be decoded.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class ConfigurationError(KatyError):
    pass
