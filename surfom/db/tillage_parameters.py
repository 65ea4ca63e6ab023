from .. import exceptions as exc


def get_tillage_params(type, f_incorp=None, depth=None):
    """
    Get the fraction of residue incorporated and the tillage depth for a tillage event.

    Parameters:
    type (str): The type of tillage, looked up case-insensitively in `tillage_types`.
    f_incorp (float, optional): Fraction of the surface residue incorporated (0-1).
        Overrides the value of the tillage type.
    depth (float, optional): Depth of tillage (mm). Overrides the value of the tillage type.

    Returns:
    list: A list containing the fraction incorporated and the tillage depth.

    Raises:
    ConfigurationError: if the tillage type is unknown and no explicit values are given.
    """
    if f_incorp is not None and depth is not None:
        return [float(f_incorp), float(depth)]

    key = type.lower() if type is not None else None
    if key not in tillage_types:
        msg = "Cannot find tillage type '%s' and no explicit f_incorp/depth given" % type
        raise exc.ConfigurationError(msg)

    params = tillage_types[key]
    f_incorp = params["f_incorp"] if f_incorp is None else f_incorp
    depth = params["depth"] if depth is None else depth
    return [float(f_incorp), float(depth)]


tillage_types = {
    "planter": {
        "f_incorp": 0.1,
        "depth": 50.0,
        "notes": "seeding, minimal soil disturbance",
    },
    "tine": {
        "f_incorp": 0.2,
        "depth": 50.0,
        "notes": "tined cultivator",
    },
    "scarifier": {
        "f_incorp": 0.3,
        "depth": 100.0,
        "notes": "",
    },
    "chisel": {
        "f_incorp": 0.4,
        "depth": 100.0,
        "notes": "chisel plough",
    },
    "rip": {
        "f_incorp": 0.3,
        "depth": 300.0,
        "notes": "deep ripper",
    },
    "disc": {
        "f_incorp": 0.5,
        "depth": 100.0,
        "notes": "offset or tandem disc",
    },
    "mouldboard": {
        "f_incorp": 0.9,
        "depth": 150.0,
        "notes": "full inversion",
    },
    "burn": {
        "f_incorp": 0.9,
        "depth": 0.0,
        "notes": "residue is removed, nothing reaches the soil profile",
    },
}
