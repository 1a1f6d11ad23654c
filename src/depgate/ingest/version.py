"""Version expression normalization shared by manifests and policy documents."""

RANGE_INDICATORS = ("^", "~")

WILDCARD = "*"


def normalize_version(raw: str) -> str:
    """
    Strip a single leading range indicator from a version expression.
    
    Only the caret and tilde markers are handled; anything else, including
    compound ranges such as ``>=1.0.0 <2.0.0``, is returned unchanged and
    compared literally.
    
    Args:
        raw: Version string as declared
        
    Returns:
        Normalized version string
    """
    if raw.startswith(RANGE_INDICATORS):
        return raw[1:]
    return raw
