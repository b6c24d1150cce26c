# -*- coding: utf-8 -*-
# Copyright (C) 2014 the2nd <the2nd@otpme.org>
import os

if os.environ.get('YKDEVICE_DEBUG_MODULE_LOADING') == "True":
    msg = _("Loading module: {module}")
    msg = msg.format(module=__name__)
    print(msg)

from . import register_cmd_help

def register():
    register_cmd_help(command="register-yubikey-otp-device", help_dict=cmd_help)

connection_syntax = ' '.join([
        '--hostname :hostname:',
        '--port :port:',
        '--bindDN|--bind-dn :bind_dn:',
        '--bindPassword|--bind-password :!bind_password:',
        '--bindPasswordFile|--bind-password-file :file:bind_password_file:',
        '--promptForBindPassword|--prompt-for-bind-password :prompt_for_bind_password=True:',
        '--useSSL|--use-ssl :use_ssl=True:',
        '--useStartTLS|--use-start-tls :use_start_tls=True:',
        '--trustAll|--trust-all :trust_all=True:',
        '--caCertFile|--ca-cert-file :file:ca_cert_file:',
        '--connectTimeout|--connect-timeout :connect_timeout:',
        ])

cmd_help = {
    '_include_global_opts'      : True,
    '_usage_help'               : _("Usage: register-yubikey-otp-device [--deregister] [--otp <otp>] [--authID <auth_id>] [--userPassword <password>|--userPasswordFile <file>|--promptForUserPassword] [connection options]"),
    '_description'              : _("Register a YubiKey OTP device with the account of a user so it may be used for UNBOUNDID-YUBIKEY-OTP authentication, or deregister one or all YubiKey OTP devices of that account."),
    'cmd'                       : ' '.join([
                                    '--deregister|--de-register :deregister=True:',
                                    '--otp :otp:',
                                    '--authID|--authenticationID|--auth-id|--authentication-id :auth_id:',
                                    '--userPassword|--user-password :!user_password:',
                                    '--userPasswordFile|--user-password-file :file:user_password_file:',
                                    '--promptForUserPassword|--prompt-for-user-password :prompt_for_user_password=True:',
                                    connection_syntax,
                                    ]),
    # (group name, args) at most one arg of a group may be given.
    '_exclusive_args'           : [
                                    ('user password', ['user_password', 'user_password_file', 'prompt_for_user_password']),
                                    ('bind password', ['bind_password', 'bind_password_file', 'prompt_for_bind_password']),
                                    ('security', ['use_ssl', 'use_start_tls']),
                                ],
    # (arg, prerequisites) arg requires at least one of prerequisites.
    '_dependent_args'           : [
                                    ('user_password', ['auth_id']),
                                    ('user_password_file', ['auth_id']),
                                    ('prompt_for_user_password', ['auth_id']),
                                    ('bind_password', ['bind_dn']),
                                    ('bind_password_file', ['bind_dn']),
                                    ('prompt_for_bind_password', ['bind_dn']),
                                ],
    '_help'                     : {
                                    '--deregister'                          : _('Deregister the YubiKey OTP device given with --otp. Without --otp all YubiKey OTP devices of the user are deregistered.'),
                                    '--otp <otp>'                           : _('A one-time password generated by the YubiKey OTP device to register or deregister.'),
                                    '--authID <auth_id>'                    : _('The authentication ID (e.g. "u:jdoe" or "dn:uid=jdoe,ou=People,dc=example,dc=com") of the user. If omitted the device is registered for the user authenticated on the connection.'),
                                    '--userPassword <password>'             : _('The static password of the user given with --authID.'),
                                    '--userPasswordFile <file>'             : _('Read the static password of the user given with --authID from the first line of <file>.'),
                                    '--promptForUserPassword'               : _('Prompt for the static password of the user given with --authID.'),
                                    '--hostname <host>'                     : _('The directory server to connect to.'),
                                    '--port <port>'                         : _('The port of the directory server.'),
                                    '--bindDN <dn>'                         : _('The DN to bind with.'),
                                    '--bindPassword <password>'             : _('The password of the bind DN.'),
                                    '--bindPasswordFile <file>'             : _('Read the password of the bind DN from the first line of <file>.'),
                                    '--promptForBindPassword'               : _('Prompt for the password of the bind DN.'),
                                    '--useSSL'                              : _('Use SSL to connect to the directory server.'),
                                    '--useStartTLS'                         : _('Use StartTLS to secure the connection.'),
                                    '--trustAll'                            : _('Trust any server certificate.'),
                                    '--caCertFile <file>'                   : _('CA certificate(s) to verify the server certificate.'),
                                    '--connectTimeout <seconds>'            : _('Connect timeout in seconds.'),
                                },
    '_examples'                 : [
                                    ('--hostname server.example.com --port 389 --bindDN uid=admin,dc=example,dc=com --bindPassword adminPassword --authenticationID u:test.user --userPassword testUserPassword --otp abcdefghijklmnopqrstuvwxyzabcdefghijklmnopqr',
                                        _('Register a YubiKey OTP device for user u:test.user.')),
                                    ('--hostname server.example.com --port 389 --bindDN uid=admin,dc=example,dc=com --bindPassword adminPassword --deregister --authenticationID dn:uid=test.user,ou=People,dc=example,dc=com',
                                        _('Deregister all YubiKey OTP devices of the user uid=test.user,ou=People,dc=example,dc=com.')),
                                ],
    }
