WGS_84_SRID = 4326
LAMBERT_72_SRID = 31370

EPSG_AUTHORITY = 'EPSG'

CRS_TYPE_NAME = 'name'

TRUTHY_VALUES = ('1', 'true', 'yes', 'on')
