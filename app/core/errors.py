"""Exceptions raised by the arrival pipeline and the delivery side."""


class PipelineError(Exception):
    """Unexpected failure while extracting, aggregating or composing arrivals."""


class DeliveryError(Exception):
    """Audio playback or device connection failed.

    Raised only inside background delivery tasks, where it is logged and
    never reaches the HTTP caller.
    """
