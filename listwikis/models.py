# listwikis/models.py
from sqlalchemy import Column, Integer, String, ForeignKey
from .database import Base

class WikiList(Base):
    __tablename__ = "wiki_list"

    wl_id = Column(Integer, primary_key=True, index=True)
    # TS_MW, e.g. 20130722000000
    wl_timestamp = Column(String(14), index=True, nullable=False)
    wl_deleted = Column(Integer, nullable=False, default=0)

class WikiSetting(Base):
    __tablename__ = "wiki_settings"

    ws_wiki = Column(Integer, ForeignKey("wiki_list.wl_id"), primary_key=True)
    ws_setting = Column(String(255), primary_key=True)
    ws_value = Column(String, nullable=True)
