"""Default parameter values of the SurfaceOrganicMatter component.

User parameters are merged over these with `util.merge_dict(...,
overwrite=True)`. `DLAYR` has no default because it depends on the soil.
"""

DEFAULT_PARAMETERS = {
    # Residue mass above which the haystack effect reduces decomposition (kg/ha)
    "CriticalResidueWeight": 2000.0,
    # Air temperature at which decomposition is not limited (Celsius)
    "OptimumDecompTemp": 20.0,
    # Cumulative soil evaporation at which residue is too dry to decompose (mm)
    "MaxCumulativeEOS": 20.0,
    "CNRatioDecompCoeff": 0.277,
    "CNRatioDecompThreshold": 25.0,
    # Rain needed to leach all mineral nutrients from the residue (mm)
    "TotalLeachRain": 25.0,
    # Minimum daily rain (plus irrigation) that leaches (mm)
    "MinRainToLeach": 10.0,
    # Lying C below which a pool decomposes completely (kg/ha)
    "CriticalMinimumOrganicC": 0.004,
    "DefaultCPRatio": 0.0,
    "DefaultStandingFraction": 0.0,
    "StandingExtinctCoeff": 0.5,
    # Fraction of the organic matter in faeces that becomes surface residue
    "FractionFaecesAdded": 0.5,
    # Residue present at the start of the simulation
    "InitialResidueName": "",
    "InitialResidueType": "",
    "InitialResidueMass": 0.0,
    "InitialStandingFraction": None,
    "InitialCNR": 0.0,
    "InitialCPR": None,
}
