def smallest_dimension(dim_1, dim_2):
    """Return the (width, height) pair with the smaller pixel area.

    Equal areas resolve to ``dim_1``.
    """
    pix_1 = dim_1[0] * dim_1[1]
    pix_2 = dim_2[0] * dim_2[1]
    return tuple(dim_2) if pix_2 < pix_1 else tuple(dim_1)
