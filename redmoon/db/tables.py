from sqlalchemy import Column, Index, MetaData
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import BigInteger, Integer, LargeBinary, Unicode


class TableSuperclass(object):
    """Superclass for declarative tables, to give them some generic niceties
    like stringification.
    """
    def __repr__(self):
        """Be as useful as possible.  Show the primary key, and an identifier
        if we've got one.
        """
        typename = '.'.join((__name__, type(self).__name__))

        pk_constraint = self.__table__.primary_key
        if not pk_constraint:
            return "<%s object at %x>" % (typename, id(self))

        pk = ', '.join(str(getattr(self, column.name))
            for column in pk_constraint.columns)
        try:
            return "<%s object (%s): %s>" % (typename, pk, self.identifier)
        except AttributeError:
            return "<%s object (%s)>" % (typename, pk)


metadata = MetaData()
TableBase = declarative_base(metadata=metadata, cls=TableSuperclass)


class Sprite(TableBase):
    """One sprite out of a resource file.

    Sprites are matched up with list file entries by (type, file_num,
    file_idx).  That isn't unique: files without a number in their name all
    get 0xFFFF, and c42.rle and c0000042.rle are both file 42.
    """
    __tablename__ = 'rle'
    __table_args__ = (
        Index('ix_rle_join', 'type', 'file_num', 'file_idx'),
    )
    gid = Column(Integer, primary_key=True, nullable=False,
        doc="A numeric ID, only meaningful within one database")
    type = Column(Unicode(79), nullable=False,
        doc="The sprite category, e.g. Icons or Tiles")
    file_num = Column(Integer, nullable=False,
        doc="The number of the resource file the sprite came from")
    file_idx = Column(Integer, nullable=False,
        doc="The sprite's slot in its file's offset table")
    length = Column(BigInteger, nullable=False,
        doc="The length field from the sprite header")
    offset_x = Column(BigInteger, nullable=False,
        doc="Horizontal drawing offset")
    offset_y = Column(BigInteger, nullable=False,
        doc="Vertical drawing offset")
    width = Column(BigInteger, nullable=False,
        doc="Width in pixels")
    height = Column(BigInteger, nullable=False,
        doc="Height in pixels")
    image = Column(LargeBinary, nullable=False,
        doc="Packed r5g6b5 pixels, two bytes each, low byte first")

    @property
    def identifier(self):
        return '{}/{}/{}'.format(self.type, self.file_num, self.file_idx)
