import enum


class DimensionalFlag(enum.IntEnum):
    D2D = 2
    D3D = 3
    D2DM = 4
    D3DM = 5

    @property
    def is_3d(self) -> bool:
        return self in (DimensionalFlag.D3D, DimensionalFlag.D3DM)

    @property
    def is_measured(self) -> bool:
        return self in (DimensionalFlag.D2DM, DimensionalFlag.D3DM)

    @property
    def coordinate_dimension(self) -> int:
        return 2 + int(self.is_3d) + int(self.is_measured)

    @classmethod
    def from_flags(cls, is_3d: bool, is_measured: bool) -> 'DimensionalFlag':
        if is_3d:
            return cls.D3DM if is_measured else cls.D3D
        return cls.D2DM if is_measured else cls.D2D
