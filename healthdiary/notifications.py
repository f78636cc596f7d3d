from dataclasses import dataclass


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = "info"


def error(description: str, title: str = "Error") -> Notification:
    return Notification(title=title, description=description, variant="error")


def success(description: str, title: str = "Success") -> Notification:
    return Notification(title=title, description=description, variant="success")
