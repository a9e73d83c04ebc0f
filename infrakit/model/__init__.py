"""Value types, time types, database field codecs and table comment SQL."""