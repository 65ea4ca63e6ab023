"""Signals that drive the surface organic matter model.

Signals are sent by the engine (or any object holding the same variable
kiosk) and received by the `SurfaceOrganicMatter` component.

=================  ==================================================
 Signal             Keyword arguments
=================  ==================================================
irrigate            amount
apply_tillage       type, f_incorp, depth
add_residue         mass, N, P, type, name
add_faeces          faeces
biomass_removed     crop_type, dm, n, p, fraction_to_residue
reset               -
=================  ==================================================
"""

irrigate = "IRRIGATE"
apply_tillage = "APPLY_TILLAGE"
add_residue = "ADD_RESIDUE"
add_faeces = "ADD_FAECES"
biomass_removed = "BIOMASS_REMOVED"
reset = "RESET"
