import datetime

JST = datetime.timezone(datetime.timedelta(hours=9))


def jst(*args):
    return datetime.datetime(*args, tzinfo=JST)
