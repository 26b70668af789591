ANNOUNCEMENT_FORMAT = "[MOTD]{motd}[/MOTD][AD]{port}[/AD]"


def encode_announcement(motd: str, port: int) -> bytes:
    """Render one LAN announcement datagram.

    The display name is substituted verbatim; listeners that split on the
    markers will misread a name containing them. Undecodable argv bytes
    (surrogate-escaped by Python) go out as the original raw bytes.
    """
    text = ANNOUNCEMENT_FORMAT.format(motd=motd, port=int(port))
    return text.encode("utf-8", "surrogateescape")
