"""CSRKey Cache Meta information.
   CSRKey Cache stores values under cryptographically secure random keys.
"""
__title__ = 'csrkey_cache'
__description__ = (
   'CSRKey Cache stores values under cryptographically secure '
   'random keys, for unguessable session and handle tokens.'
)
__version__ = '0.1.0'
__copyright__ = 'Copyright (c) 2023 Jesus Lara'
__author__ = 'Jesus Lara'
__author_email__ = 'jesuslarag@gmail.com'
__license__ = 'Apache-2.0'
__url__ = 'https://github.com/phenobarbital/csrkey-cache'
