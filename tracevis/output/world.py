"""
Coarse world coastlines as (longitude, latitude) polylines

Low resolution on purpose: a terminal cell covers several degrees, so a
few dozen points per landmass is enough to be recognisable.
"""

NORTH_AMERICA = [
    (-168, 65), (-162, 70), (-140, 70), (-125, 70), (-95, 72), (-80, 68),
    (-65, 60), (-55, 52), (-66, 45), (-70, 42), (-76, 35), (-81, 31),
    (-80, 25), (-82, 27), (-84, 30), (-90, 29), (-97, 27), (-97, 22),
    (-90, 18), (-87, 21), (-88, 15), (-83, 10), (-78, 8), (-80, 8),
    (-86, 12), (-92, 15), (-105, 20), (-110, 24), (-112, 30), (-115, 30),
    (-117, 33), (-121, 35), (-124, 40), (-124, 48), (-130, 55), (-140, 60),
    (-152, 58), (-160, 55), (-165, 60), (-168, 65),
]

GREENLAND = [
    (-45, 60), (-52, 65), (-55, 72), (-60, 77), (-70, 78), (-60, 82),
    (-30, 83), (-20, 78), (-20, 70), (-30, 68), (-40, 65), (-45, 60),
]

SOUTH_AMERICA = [
    (-78, 8), (-72, 12), (-62, 10), (-52, 5), (-50, 0), (-35, -5),
    (-38, -13), (-40, -22), (-48, -26), (-53, -34), (-58, -38), (-65, -42),
    (-67, -50), (-69, -55), (-74, -52), (-75, -45), (-73, -37), (-71, -30),
    (-70, -18), (-76, -14), (-81, -6), (-80, 0), (-78, 8),
]

EURASIA = [
    (-10, 36), (-9, 43), (-2, 44), (-5, 48), (2, 51), (8, 54), (10, 58),
    (5, 62), (15, 69), (25, 71), (40, 67), (60, 70), (80, 73), (100, 77),
    (115, 73), (140, 72), (160, 70), (180, 68), (180, 65), (170, 60),
    (163, 58), (156, 51), (142, 59), (135, 55), (141, 48), (132, 43),
    (128, 38), (126, 35), (121, 32), (122, 25), (115, 22), (108, 21),
    (106, 10), (104, 1), (100, 5), (98, 16), (94, 16), (90, 22), (80, 15),
    (77, 8), (73, 18), (67, 25), (57, 25), (56, 27), (50, 30), (48, 29),
    (51, 24), (56, 26), (59, 22), (52, 16), (44, 12), (43, 15), (35, 28),
    (34, 31), (36, 36), (30, 36), (27, 40), (29, 41), (41, 41), (28, 45),
    (23, 40), (20, 40), (19, 42), (14, 45), (12, 44), (16, 40), (12, 38),
    (8, 44), (3, 43), (-1, 37), (-6, 36), (-10, 36),
]

AFRICA = [
    (-17, 21), (-13, 28), (-10, 31), (-6, 36), (10, 37), (11, 33), (20, 31),
    (32, 31), (35, 28), (43, 12), (51, 12), (48, 4), (40, -3), (39, -10),
    (41, -15), (35, -24), (33, -28), (27, -34), (20, -35), (18, -32),
    (12, -18), (13, -12), (9, -1), (9, 4), (3, 6), (-8, 4), (-13, 8),
    (-17, 14), (-17, 21),
]

MADAGASCAR = [(44, -25), (47, -25), (50, -15), (49, -12), (44, -17), (44, -25)]

AUSTRALIA = [
    (114, -22), (114, -34), (118, -35), (124, -33), (131, -31), (138, -35),
    (141, -38), (147, -38), (150, -37), (153, -32), (153, -25), (146, -19),
    (142, -11), (136, -12), (131, -11), (126, -14), (122, -18), (114, -22),
]

NEW_ZEALAND = [
    (172, -34), (178, -38), (175, -41), (171, -45), (167, -46), (172, -41),
    (172, -34),
]

BRITAIN = [
    (-5, 50), (1, 51), (2, 53), (-2, 56), (-2, 58), (-5, 58), (-6, 56),
    (-3, 54), (-5, 52), (-5, 50),
]

JAPAN = [
    (130, 31), (132, 34), (136, 35), (140, 36), (141, 41), (142, 45),
    (145, 44), (141, 39), (140, 35), (135, 33), (130, 31),
]

BORNEO = [(109, 2), (117, 7), (119, 1), (116, -4), (110, -3), (109, 2)]

SUMATRA = [(95, 5), (98, 4), (106, -6), (102, -4), (95, 5)]

ANTARCTICA = [
    (-180, -78), (-150, -76), (-120, -73), (-90, -72), (-60, -64),
    (-45, -75), (-20, -73), (0, -70), (30, -69), (60, -67), (90, -66),
    (120, -66), (150, -69), (180, -78),
]

COASTLINES = [
    NORTH_AMERICA, GREENLAND, SOUTH_AMERICA, EURASIA, AFRICA, MADAGASCAR,
    AUSTRALIA, NEW_ZEALAND, BRITAIN, JAPAN, BORNEO, SUMATRA, ANTARCTICA,
]
