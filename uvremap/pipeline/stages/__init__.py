# Importing the modules fills pipeline.base.REGISTRY
from . import s00_load_images, s10_locate_markers, s20_select_triangles, s30_solve_affine, s40_print_report, s50_export  # noqa: F401
