# Default method parameters and default query fragments.
# Id tie-breakers keep paging stable when the sort column repeats.
from sqlalchemy.orm import selectinload
from models import MediaFile, Pin, Tag, Website

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 25

DEFAULT_MEDIA_FILE_SAMPLE_SIZE = 5  # representative media files per tag

DEFAULT_TAG_INCLUDES = ()
DEFAULT_TAG_ORDER_BY = (Tag.name.asc(),)

DEFAULT_MEDIA_FILE_INCLUDES = (selectinload(MediaFile.tags),)
DEFAULT_MEDIA_FILE_ORDER_BY = (MediaFile.id.asc(),)

DEFAULT_WEBSITE_INCLUDES = ()
DEFAULT_WEBSITE_ORDER_BY = (Website.name.asc(), Website.id.asc())

DEFAULT_PIN_INCLUDES = (selectinload(Pin.media_file),)
DEFAULT_PIN_ORDER_BY = (Pin.source_url.asc(), Pin.id.asc())
